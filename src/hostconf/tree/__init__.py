"""Configuration tree package.

This package provides:
- ConfigNode / ConfigTree: the parent-linked tree of named, keyed nodes
- find_ancestor_child: the nearest-scope-wins ancestor walk
- TreeLoader: YAML tree files validated into ConfigTree objects
"""

from hostconf.tree.loader import NodeSchema, TreeLoader, load_tree
from hostconf.tree.node import ConfigNode, ConfigTree, ConfigValue, find_ancestor_child

__all__ = [
    "ConfigNode",
    "ConfigTree",
    "ConfigValue",
    "NodeSchema",
    "TreeLoader",
    "find_ancestor_child",
    "load_tree",
]
