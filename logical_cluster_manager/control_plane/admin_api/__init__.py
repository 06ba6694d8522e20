"""
Admin API rendering logical cluster operations as JSON-able dictionaries.
"""

from typing import Any, Dict, List, Sequence

from logical_cluster_manager.common.exception import ClusterNotFound
from logical_cluster_manager.common.logging import get_logger
from logical_cluster_manager.common.model import ScaleDirection
from logical_cluster_manager.membership import MembershipManager, NodeInventory

logger = get_logger(__name__)


class AdminAPI:
    """Thin presentation layer over MembershipManager for the CLI."""

    def __init__(self, manager: MembershipManager, inventory: NodeInventory):
        self.manager = manager
        self.inventory = inventory

    def create_cluster(self, name: str, node_ids: Sequence[str]) -> Dict[str, Any]:
        self.manager.create_cluster(name, node_ids)
        return self.manager.get_cluster(name).to_dict()

    def get_cluster(self, name: str) -> Dict[str, Any]:
        return self.manager.get_cluster(name).to_dict()

    def list_clusters(self) -> List[Dict[str, Any]]:
        return [cluster.to_dict() for cluster in self.manager.list_clusters()]

    def delete_cluster(self, name: str) -> Dict[str, Any]:
        self.manager.delete_cluster(name)
        return {"cluster_name": name, "deleted": True}

    def rename_cluster(self, new_name: str, node_ids: Sequence[str]) -> Dict[str, Any]:
        return self.manager.rename_cluster(new_name, node_ids).to_dict()

    def scale_cluster(self, name: str, node_ids: Sequence[str], direction: str) -> Dict[str, Any]:
        try:
            return self.manager.scale_cluster(name, node_ids, direction).to_dict()
        except ClusterNotFound:
            if direction != ScaleDirection.SHRINK:
                raise
            # 缩容移除了最后一个成员，集群随之消失
            logger.info(f"Logical cluster [{name}] has no members left after shrink")
            return {"cluster_name": name, "hosts": []}

    def list_nodes(self) -> List[Dict[str, Any]]:
        """All nodes with their labels and current logical cluster."""
        label_key = self.manager.label_key
        return [
            {
                "name": node.name,
                "logical_cluster": node.tag(label_key),
                "labels": node.tags,
            }
            for node in self.inventory.list_all()
        ]

    def describe_node(self, node_id: str) -> Dict[str, Any]:
        labels = self.inventory.get_node_tags(node_id)
        return {
            "name": node_id,
            "logical_cluster": labels.get(self.manager.label_key),
            "labels": labels,
        }
