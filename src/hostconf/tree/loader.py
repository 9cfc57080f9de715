"""Load configuration trees from YAML files.

A tree file is a single root node. Every node is a mapping with a
``name``, optional ``values`` and optional ``children``::

    name: server
    children:
      - name: simple_scheduler
        values: {maxRequests: 20}
      - name: location
        values: {path: /}
        children:
          - name: application
            values: {appDir: /srv/shiny/app}
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Any, ClassVar, Final, Optional

import yaml
from dotenv import load_dotenv
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
)

from hostconf.constants import CONFIG_ENV_VAR
from hostconf.errors import ConfigLoadError
from hostconf.tree.node import ConfigNode, ConfigTree, ConfigValue

logger: Final = logging.getLogger(__name__)


def _interpolate_env(content: str) -> str:
    return re.sub(r"\$\{(\w+)\}", lambda m: os.getenv(m.group(1), ""), content)


class NodeSchema(BaseModel):
    """Schema for one node of a tree file."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1, description="Node kind, e.g. 'location'")
    values: dict[str, ConfigValue] = Field(default_factory=dict)
    children: list[NodeSchema] = Field(default_factory=list)

    # An empty YAML key ("values:") parses as None
    @field_validator("values", "children", mode="before")
    @classmethod
    def empty_as_default(cls, v: Any, info: ValidationInfo) -> Any:
        if v is None:
            return {} if info.field_name == "values" else []
        return v

    def build(self, parent: Optional[ConfigNode] = None) -> ConfigNode:
        """Create the ConfigNode subtree described by this schema."""
        node = ConfigNode(self.name, self.values, parent=parent)
        for child in self.children:
            child.build(node)
        return node


class TreeLoader:
    """Locate, read and validate tree files."""

    DEFAULT_CONFIG_PATHS: ClassVar[list[Path]] = [
        Path("hostconf.yaml"),
        Path("~/.config/hostconf/hostconf.yaml").expanduser(),
        Path("/etc/hostconf/hostconf.yaml"),
    ]

    @classmethod
    def find_config(cls, path: Optional[Path] = None) -> Path:
        """Resolve which tree file to load.

        Order: explicit ``path``, the HOSTCONF_CONFIG environment variable,
        then the default search paths.

        Raises:
            FileNotFoundError: If no candidate file exists
        """
        if path is not None:
            if not path.exists():
                raise FileNotFoundError(f"Config file not found: {path}")
            return path

        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            path = Path(env_path)
            if not path.exists():
                raise FileNotFoundError(
                    f"Config file from {CONFIG_ENV_VAR} not found: {path}"
                )
            return path

        for default_path in cls.DEFAULT_CONFIG_PATHS:
            if default_path.exists():
                return default_path

        raise FileNotFoundError(
            f"No configuration file found. Create hostconf.yaml or set {CONFIG_ENV_VAR}."
        )

    @staticmethod
    def parse(data: Any) -> ConfigTree:
        """Validate already-parsed YAML data and build a tree from it.

        Raises:
            ConfigLoadError: If the data does not match the node schema
        """
        try:
            schema = NodeSchema.model_validate(data)
        except ValidationError as err:
            raise ConfigLoadError(f"Invalid configuration tree:\n{err}", err) from err
        return ConfigTree(schema.build())

    @classmethod
    def load(cls, path: Optional[Path] = None) -> ConfigTree:
        """Load a configuration tree from a YAML file.

        ``${VAR}`` references are replaced from the environment (after
        loading any ``.env`` file) before parsing.

        Args:
            path: Path to the tree file (optional, searched for if None)

        Returns:
            ConfigTree owning the loaded nodes

        Raises:
            FileNotFoundError: If no tree file is found
            ConfigLoadError: If the file cannot be parsed or is invalid
        """
        path = cls.find_config(path)
        load_dotenv()

        try:
            data = yaml.safe_load(_interpolate_env(path.read_text()))
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigLoadError(f"Unable to read config YAML: {exc}", exc) from exc

        tree = cls.parse(data)
        logger.info("Loaded configuration tree from %s", path)
        return tree


def load_tree(path: Optional[Path] = None) -> ConfigTree:
    """Shortcut for ``TreeLoader.load``."""
    return TreeLoader.load(path)
