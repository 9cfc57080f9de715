"""Configuration tree nodes and the ancestor-walk search."""

from __future__ import annotations

import weakref
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from typing import Optional, Union

from hostconf.constants import APPLICATION_NODE
from hostconf.errors import DanglingParentError, TreeCycleError, TreeStructureError

ConfigValue = Union[str, int, float, bool]
NodePredicate = Callable[["ConfigNode"], bool]


class ConfigNode:
    """One named node of a configuration tree.

    A node owns its children. The link back to the parent is a weak
    reference; every node also holds a strong reference to the root of its
    tree, so any reachable node keeps all of its ancestors alive. Passing
    ``parent`` attaches the new node as that parent's last child.
    """

    def __init__(
        self,
        name: str,
        values: Optional[Mapping[str, ConfigValue]] = None,
        parent: Optional[ConfigNode] = None,
    ) -> None:
        self.name = name
        self.values: dict[str, ConfigValue] = dict(values or {})
        self.children: list[ConfigNode] = []
        self._parent_ref: Optional[weakref.ref[ConfigNode]] = None
        self._root: Optional[ConfigNode] = None
        if parent is not None:
            parent.add_child(self)

    def __repr__(self) -> str:
        return f"ConfigNode(name={self.name!r}, values={self.values!r})"

    @property
    def parent(self) -> Optional[ConfigNode]:
        """Enclosing node, or None at the root."""
        return self._parent_ref() if self._parent_ref is not None else None

    @property
    def root(self) -> ConfigNode:
        """Root of the tree this node belongs to."""
        return self._root if self._root is not None else self

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def path(self) -> str:
        """Slash-joined labels from the root down to this node.

        Same-named siblings are told apart by their index, e.g.
        ``server/location/application[1]``.
        """
        labels: list[str] = []
        for node in self.ancestry():
            label = node.name
            parent = node.parent
            if parent is not None:
                same = parent.get_all(node.name)
                if len(same) > 1:
                    index = next(i for i, sibling in enumerate(same) if sibling is node)
                    label = f"{node.name}[{index}]"
            labels.append(label)
        return "/".join(reversed(labels))

    def add_child(self, node: ConfigNode) -> ConfigNode:
        """Append ``node`` to this node's children and point it back here.

        The attached subtree is re-homed onto this node's root.

        Raises:
            TreeStructureError: If ``node`` already belongs to another parent
        """
        if node._parent_ref is not None:
            raise TreeStructureError("Node already has a parent", node.name)
        node._parent_ref = weakref.ref(self)
        _set_root(node, self.root)
        self.children.append(node)
        return node

    def ancestry(self) -> Iterator[ConfigNode]:
        """Yield this node, then each enclosing node up to the root.

        Raises:
            TreeCycleError: If a node is reached twice
            DanglingParentError: If a parent does not own its child
        """
        seen: set[int] = set()
        node: Optional[ConfigNode] = self
        while node is not None:
            if id(node) in seen:
                raise TreeCycleError("Ancestor chain loops back on itself", node.name)
            seen.add(id(node))
            yield node
            node = _checked_parent(node)

    def get_one(self, name: str, inherit: bool = True) -> Optional[ConfigNode]:
        """Return the first child named ``name``.

        With ``inherit`` the search climbs through enclosing scopes;
        otherwise only this node's own children are examined.
        """
        if inherit:
            return find_ancestor_child(self, name)
        return next((child for child in self.children if child.name == name), None)

    def get_all(self, name: str) -> list[ConfigNode]:
        """Return every direct child named ``name``, in declaration order."""
        return [child for child in self.children if child.name == name]


def _set_root(node: ConfigNode, root: ConfigNode) -> None:
    # Called before ``node`` is appended, so its subtree cannot reach root yet
    seen: set[int] = set()
    stack = [node]
    while stack:
        current = stack.pop()
        if id(current) in seen:
            continue
        seen.add(id(current))
        current._root = root if current is not root else None
        stack.extend(current.children)


def _checked_parent(node: ConfigNode) -> Optional[ConfigNode]:
    ref = node._parent_ref
    if ref is None:
        return None
    parent = ref()
    if parent is None:
        raise DanglingParentError("Parent node no longer exists", node.name)
    if not any(child is node for child in parent.children):
        raise DanglingParentError(
            f"Parent '{parent.name}' does not list this node as a child", node.name
        )
    return parent


def _as_predicate(predicate: Union[str, NodePredicate]) -> NodePredicate:
    if isinstance(predicate, str):
        name = predicate
        return lambda node: node.name == name
    return predicate


def find_ancestor_child(
    start: ConfigNode, predicate: Union[str, NodePredicate]
) -> Optional[ConfigNode]:
    """Find the nearest node satisfying ``predicate`` in enclosing scopes.

    The children of ``start`` are searched first (``start`` itself is never
    a candidate), then the children of its parent, and so on up to the
    children of the root. Within one scope children are examined in
    declaration order, so the nearest scope wins and, inside a scope, the
    first-declared node wins.

    Args:
        start: Node whose scope is searched first
        predicate: Callable taking a node, or a node name to match exactly

    Returns:
        The first matching node, or None if no scope contains one

    Raises:
        TreeCycleError: If the ancestor chain contains a cycle
        DanglingParentError: If a node's parent does not own it
    """
    matches = _as_predicate(predicate)
    for scope in start.ancestry():
        for child in scope.children:
            if matches(child):
                return child
    return None


@dataclass
class ConfigTree:
    """A configuration tree, addressed through its root."""

    root: ConfigNode

    def walk(self) -> Iterator[ConfigNode]:
        """Yield every node depth first in declaration order.

        Raises:
            TreeCycleError: If a node is reachable twice
        """
        seen: set[int] = set()
        stack = [self.root]
        while stack:
            node = stack.pop()
            if id(node) in seen:
                raise TreeCycleError("Node reachable more than once", node.name)
            seen.add(id(node))
            yield node
            stack.extend(reversed(node.children))

    def find(self, name: str) -> list[ConfigNode]:
        """Return every node named ``name`` anywhere in the tree."""
        return [node for node in self.walk() if node.name == name]

    def applications(self) -> list[ConfigNode]:
        return self.find(APPLICATION_NODE)
