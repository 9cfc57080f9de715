"""hostconf - effective runtime settings for hosted applications.

Settings are declared anywhere in a location/server configuration tree and
inherited by applications through a nearest-scope-wins ancestor walk.
"""

from hostconf.settings import ApplicationSettings, SettingsResolver, resolve_application_settings
from hostconf.tree import ConfigNode, ConfigTree, find_ancestor_child, load_tree

__version__ = "0.1.0"

__all__ = [
    "ApplicationSettings",
    "ConfigNode",
    "ConfigTree",
    "SettingsResolver",
    "__version__",
    "find_ancestor_child",
    "load_tree",
    "resolve_application_settings",
]
