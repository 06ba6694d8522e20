"""
Logical cluster manager: partition Kubernetes nodes into named logical
clusters through a single exclusive node label.
"""

from logical_cluster_manager.common.exception import (
    ClusterNotFound,
    ControlPlaneError,
    LogicalClusterError,
    NoClustersExist,
)
from logical_cluster_manager.common.model import LogicalCluster, Node, ScaleDirection
from logical_cluster_manager.membership import MembershipManager, NodeInventory, TagPatcher

__version__ = "0.1.0"

__all__ = [
    "ClusterNotFound",
    "ControlPlaneError",
    "LogicalClusterError",
    "NoClustersExist",
    "LogicalCluster",
    "Node",
    "ScaleDirection",
    "MembershipManager",
    "NodeInventory",
    "TagPatcher",
]
