"""Exception classes for configuration trees.

A malformed tree is a loader or programmer error and is raised as a
``TreeStructureError``. Settings missing from a well-formed tree are never
errors; the resolver reports them as absent fields instead.
"""

from __future__ import annotations

from typing import Optional


class HostConfError(Exception):
    """Base class for all hostconf errors."""


class TreeStructureError(HostConfError):
    """Raised when a configuration tree violates its structural invariants.

    The tree must be acyclic, and every node's parent must list that node
    among its children. Trees breaking either rule cannot be searched.
    """

    def __init__(self, message: str, node_name: Optional[str] = None) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message
            node_name: Name of the node where the violation was detected
        """
        if node_name is not None:
            message = f"{message} (at node '{node_name}')"
        super().__init__(message)
        self.node_name: Optional[str] = node_name


class TreeCycleError(TreeStructureError):
    """Raised when an ancestor walk reaches a node it already visited."""

    pass


class DanglingParentError(TreeStructureError):
    """Raised when a node's parent does not own it or no longer exists."""

    pass


class ConfigLoadError(HostConfError, RuntimeError):
    """Raised when a tree file cannot be read, parsed or validated."""

    def __init__(
        self, message: str, original_error: Optional[Exception] = None
    ) -> None:
        """Initialize with loading error details.

        Args:
            message: Description of the loading error
            original_error: The original exception that was caught
        """
        super().__init__(message)
        self.original_error = original_error
