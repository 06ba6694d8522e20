"""
Logical cluster membership management.

A logical cluster is nothing but the set of nodes whose membership label
carries the cluster name. Every read recomputes membership from the API
server; every write is a sequence of single-node label patches applied in
the order the caller supplied them.

Multi-node writes are fail-fast: the first ControlPlaneError aborts the
sequence and is re-raised unchanged. Nodes patched before the failure stay
patched (there is no rollback), so after any error the caller must re-query
before assuming a particular state.
"""

from typing import Dict, List, Optional, Sequence

from logical_cluster_manager.common.config import settings
from logical_cluster_manager.common.exception import (
    ClusterNotFound,
    ControlPlaneError,
    InvalidClusterName,
    NoClustersExist,
)
from logical_cluster_manager.common.logging import get_logger
from logical_cluster_manager.common.model import (
    LogicalCluster,
    RemoveTagPatch,
    ScaleDirection,
    SetTagPatch,
    validate_cluster_name,
)
from logical_cluster_manager.membership.node_inventory import NodeInventory
from logical_cluster_manager.membership.tag_patcher import TagPatch, TagPatcher


logger = get_logger(__name__)


class MembershipManager:
    """Create, inspect, rename, scale and delete logical clusters."""

    def __init__(self, inventory: NodeInventory, patcher: TagPatcher, label_key: Optional[str] = None):
        self.inventory = inventory
        self.patcher = patcher
        self.label_key = label_key or settings.CLUSTER_LABEL_KEY

    def members_of(self, name: str) -> List[str]:
        """Names of the nodes currently labelled with ``name``.

        A name that cannot be stored as a label value has no members. The
        label is re-checked on every node so that selector syntax inside
        ``name`` never widens the match.
        """
        try:
            validate_cluster_name(name)
        except InvalidClusterName:
            logger.debug(f"{name!r} is not a valid label value, treating it as having no members")
            return []
        nodes = self.inventory.list_by_tag_equals(self.label_key, name)
        return [node.name for node in nodes if node.tag(self.label_key) == name]

    def create_cluster(self, name: str, node_ids: Sequence[str]) -> None:
        """Label every node in ``node_ids`` with ``name``, in order.

        A node that already belongs to another cluster moves to ``name``.
        """
        validate_cluster_name(name)
        logger.info(f"Creating logical cluster [{name}] on {len(node_ids)} nodes")
        self._patch_nodes(node_ids, SetTagPatch(key=self.label_key, value=name), f"create [{name}]")

    def get_cluster(self, name: str) -> LogicalCluster:
        members = self.members_of(name)
        if not members:
            raise ClusterNotFound(name)
        return LogicalCluster(name=name, members=members)

    def list_clusters(self) -> List[LogicalCluster]:
        """All logical clusters, in the order their names first appear in the node listing."""
        nodes = self.inventory.list_by_tag_exists(self.label_key)
        if not nodes:
            raise NoClustersExist(self.label_key)

        # 单次遍历按标签值分组，dict 保持首次出现的顺序
        grouped: Dict[str, List[str]] = {}
        for node in nodes:
            grouped.setdefault(node.tags[self.label_key], []).append(node.name)

        logger.debug(f"Found {len(grouped)} logical clusters across {len(nodes)} nodes")
        return [LogicalCluster(name=name, members=members) for name, members in grouped.items()]

    def delete_cluster(self, name: str) -> None:
        """Remove the membership label from every current member of ``name``."""
        cluster = self.get_cluster(name)
        logger.info(f"Deleting logical cluster [{name}] with {len(cluster.members)} members")
        self._patch_nodes(cluster.members, RemoveTagPatch(key=self.label_key), f"delete [{name}]")

    def rename_cluster(self, new_name: str, node_ids: Sequence[str]) -> LogicalCluster:
        """Relabel exactly ``node_ids`` with ``new_name`` and return the new view.

        Members of the old name that are not listed keep their old label.
        """
        logger.info(f"Renaming {len(node_ids)} nodes to logical cluster [{new_name}]")
        self.create_cluster(new_name, node_ids)
        return self.get_cluster(new_name)

    def scale_cluster(self, name: str, node_ids: Sequence[str], direction: str) -> LogicalCluster:
        """Add (expand) or remove (shrink) ``node_ids`` and return the resulting view.

        Shrinking away the last member makes the final read raise ClusterNotFound.
        """
        ScaleDirection.validate(direction)
        if direction == ScaleDirection.EXPAND:
            logger.info(f"Expanding logical cluster [{name}] by {len(node_ids)} nodes")
            self.create_cluster(name, node_ids)
        else:
            logger.info(f"Shrinking logical cluster [{name}] by {len(node_ids)} nodes")
            self._patch_nodes(node_ids, RemoveTagPatch(key=self.label_key), f"shrink [{name}]")
        return self.get_cluster(name)

    def _patch_nodes(self, node_ids: Sequence[str], patch: TagPatch, operation: str) -> None:
        patched = 0
        for node_id in node_ids:
            try:
                self.patcher.apply(node_id, patch)
            except ControlPlaneError:
                logger.warning(f"{operation} aborted at node {node_id}: "
                               f"{patched} of {len(node_ids)} nodes were already patched")
                raise
            patched += 1
