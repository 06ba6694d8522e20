"""
Exception hierarchy for the logical cluster manager.
"""

from typing import Optional


class LogicalClusterError(Exception):
    """Base exception for all logical-cluster errors."""
    pass


class ControlPlaneError(LogicalClusterError):
    """Raised when a call to the Kubernetes API server fails.

    Covers transport failures as well as API-level rejections. The original
    client exception is chained as ``__cause__``.
    """

    def __init__(self, message: str, node: Optional[str] = None, status: Optional[int] = None):
        super().__init__(message)
        self.node = node
        self.status = status


class ClusterNotFound(LogicalClusterError):
    """Raised when no node currently carries the requested cluster name."""

    def __init__(self, name: str):
        super().__init__(f"logical cluster '{name}' does not exist")
        self.name = name


class NoClustersExist(LogicalClusterError):
    """Raised when no node in the fleet carries the membership label."""

    def __init__(self, label_key: str = "logical-cluster"):
        super().__init__(f"no node carries the '{label_key}' label")
        self.label_key = label_key


class InvalidClusterName(LogicalClusterError, ValueError):
    """Raised when a cluster name is not a valid Kubernetes label value."""

    def __init__(self, name: str):
        super().__init__(f"invalid logical cluster name: {name!r}")
        self.name = name


class ConfigurationError(LogicalClusterError):
    """Raised when no usable Kubernetes client configuration can be loaded."""
    pass
