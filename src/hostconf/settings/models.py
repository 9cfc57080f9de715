"""Resolved settings handed to the application launcher."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from hostconf.tree.node import ConfigValue


class AppDefaults(BaseModel):
    """Process lifecycle timing for an application.

    ``None`` means the setting was neither declared in the tree nor
    defaulted, which is distinct from an explicit timeout of 0.
    """

    model_config = ConfigDict(populate_by_name=True)

    init_timeout: Optional[ConfigValue] = Field(
        None, alias="initTimeout", description="Seconds allowed for a process to start"
    )
    idle_timeout: Optional[ConfigValue] = Field(
        None,
        alias="idleTimeout",
        description="Seconds an idle process is kept alive",
    )


class ApplicationSettings(BaseModel):
    """Effective settings for one application.

    ``scheduler`` maps a single scheduler kind (e.g. ``simple``) to its
    parameters and is always populated.
    """

    model_config = ConfigDict(populate_by_name=True)

    scheduler: dict[str, dict[str, ConfigValue]] = Field(..., min_length=1)
    app_defaults: AppDefaults = Field(default_factory=AppDefaults, alias="appDefaults")

    @property
    def scheduler_kind(self) -> str:
        return next(iter(self.scheduler))

    @property
    def init_timeout(self) -> Optional[ConfigValue]:
        return self.app_defaults.init_timeout

    @property
    def idle_timeout(self) -> Optional[ConfigValue]:
        return self.app_defaults.idle_timeout

    def to_dict(self) -> dict[str, Any]:
        """Dump using the launcher's key names, leaving absent timeouts out."""
        return self.model_dump(by_alias=True, exclude_none=True)
