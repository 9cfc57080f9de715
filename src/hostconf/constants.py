from __future__ import annotations

from typing import Final

# Node names
APPLICATION_NODE: Final = "application"
INIT_TIMEOUT_NODE: Final = "app_init_timeout"
IDLE_TIMEOUT_NODE: Final = "app_idle_timeout"
SCHEDULER_SUFFIX: Final = "_scheduler"
TIMEOUT_KEY: Final = "timeout"

# Scheduler kinds recognised as <kind>_scheduler nodes
SCHEDULER_KINDS: Final[tuple[str, ...]] = ("simple", "utilization")

# Built-in defaults, applied when nothing is declared in the tree
DEFAULT_SCHEDULER: Final[dict[str, dict[str, int]]] = {"simple": {"maxRequests": 100}}
DEFAULT_INIT_TIMEOUT: Final = 60  # seconds
DEFAULT_IDLE_TIMEOUT: Final = 5  # seconds

# Tree file lookup
CONFIG_ENV_VAR: Final = "HOSTCONF_CONFIG"
