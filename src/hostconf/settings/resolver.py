"""Resolve an application's effective settings from the configuration tree.

Each setting is looked up independently with the same nearest-scope-wins
ancestor walk, so a narrow scope can override one setting while the rest
are inherited from a shared parent scope.

A scheduler is always produced: when none is declared the built-in block
is used. Timeouts are only defaulted when the caller asks for it; otherwise
an undeclared timeout stays absent, which lets diagnostic tooling show
"explicit" configuration using the same resolver as runtime startup.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterable, Mapping
from typing import Final, Optional

from hostconf.constants import (
    DEFAULT_IDLE_TIMEOUT,
    DEFAULT_INIT_TIMEOUT,
    DEFAULT_SCHEDULER,
    IDLE_TIMEOUT_NODE,
    INIT_TIMEOUT_NODE,
    SCHEDULER_KINDS,
    SCHEDULER_SUFFIX,
    TIMEOUT_KEY,
)
from hostconf.settings.models import AppDefaults, ApplicationSettings
from hostconf.tree.node import ConfigNode, ConfigValue, find_ancestor_child

logger: Final = logging.getLogger(__name__)

SchedulerBlock = dict[str, dict[str, ConfigValue]]


class SettingsResolver:
    """Turns ancestor-walk lookups into ApplicationSettings.

    The resolver holds no per-call state; one instance can serve any number
    of concurrent resolutions over an unchanging tree.
    """

    def __init__(
        self,
        scheduler_kinds: Iterable[str] = SCHEDULER_KINDS,
        default_scheduler: Mapping[str, Mapping[str, ConfigValue]] = DEFAULT_SCHEDULER,
        default_init_timeout: ConfigValue = DEFAULT_INIT_TIMEOUT,
        default_idle_timeout: ConfigValue = DEFAULT_IDLE_TIMEOUT,
    ) -> None:
        """Initialize the resolver.

        Args:
            scheduler_kinds: Short names of recognised schedulers; a node
                named ``<kind>_scheduler`` declares one
            default_scheduler: Block used when no scheduler is declared
            default_init_timeout: Init timeout used when defaults are requested
            default_idle_timeout: Idle timeout used when defaults are requested

        Raises:
            ValueError: If the default scheduler block is empty
        """
        if not default_scheduler:
            raise ValueError("default_scheduler must declare a scheduler kind")

        self._scheduler_nodes: dict[str, str] = {
            f"{kind}{SCHEDULER_SUFFIX}": kind for kind in scheduler_kinds
        }
        self.default_scheduler: SchedulerBlock = {
            kind: dict(params) for kind, params in default_scheduler.items()
        }
        self.default_init_timeout = default_init_timeout
        self.default_idle_timeout = default_idle_timeout

    @property
    def scheduler_kinds(self) -> list[str]:
        return list(self._scheduler_nodes.values())

    def resolve(self, app_node: ConfigNode, provide_defaults: bool) -> ApplicationSettings:
        """Resolve the effective settings for ``app_node``.

        Args:
            app_node: The application's node; its own children form the
                nearest scope
            provide_defaults: Substitute built-in timeouts for undeclared ones

        Returns:
            A freshly built ApplicationSettings

        Raises:
            TreeStructureError: If the ancestor chain is malformed
        """
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Resolving settings for %s (defaults %s)",
                app_node.path,
                "on" if provide_defaults else "off",
            )
        return ApplicationSettings(
            scheduler=self.resolve_scheduler(app_node),
            app_defaults=AppDefaults(
                init_timeout=self._resolve_timeout(
                    app_node, INIT_TIMEOUT_NODE, self.default_init_timeout, provide_defaults
                ),
                idle_timeout=self._resolve_timeout(
                    app_node, IDLE_TIMEOUT_NODE, self.default_idle_timeout, provide_defaults
                ),
            ),
        )

    def resolve_scheduler(self, app_node: ConfigNode) -> SchedulerBlock:
        """Return the nearest declared scheduler block, or the default one."""
        node = find_ancestor_child(app_node, lambda n: n.name in self._scheduler_nodes)
        if node is None:
            logger.debug("No scheduler declared; using default %s", self.default_scheduler)
            return copy.deepcopy(self.default_scheduler)

        kind = self._scheduler_nodes[node.name]
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Using %s scheduler from %s", kind, node.path)
        return {kind: dict(node.values)}

    def _resolve_timeout(
        self,
        app_node: ConfigNode,
        node_name: str,
        default: ConfigValue,
        provide_defaults: bool,
    ) -> Optional[ConfigValue]:
        node = find_ancestor_child(app_node, node_name)
        if node is not None:
            if TIMEOUT_KEY not in node.values:
                logger.warning("%s declared without a '%s' value", node.path, TIMEOUT_KEY)
                return None
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("Using %s=%s from %s", node_name, node.values[TIMEOUT_KEY], node.path)
            return node.values[TIMEOUT_KEY]

        if provide_defaults:
            logger.debug("No %s declared; defaulting to %s", node_name, default)
            return default
        return None


_default_resolver: Final = SettingsResolver()


def resolve_application_settings(
    app_node: ConfigNode, provide_defaults: bool
) -> ApplicationSettings:
    """Resolve ``app_node``'s settings with the built-in defaults."""
    return _default_resolver.resolve(app_node, provide_defaults)
