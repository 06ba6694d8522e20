"""
Read-only node queries against the Kubernetes API server.
"""

from typing import Dict, List, Optional

from kubernetes.client import CoreV1Api

from logical_cluster_manager.common.config import settings
from logical_cluster_manager.common.logging import get_logger
from logical_cluster_manager.common.model import Node
from logical_cluster_manager.membership.api_errors import control_plane_call


logger = get_logger(__name__)


class NodeInventory:
    """Lists nodes and their labels. Never mutates anything."""

    def __init__(self, core_api: CoreV1Api, request_timeout: Optional[float] = None,
                 page_size: Optional[int] = None):
        self.core_api = core_api
        self.request_timeout = settings.REQUEST_TIMEOUT if request_timeout is None else request_timeout
        self.page_size = settings.LIST_PAGE_SIZE if page_size is None else page_size

    def list_all(self) -> List[Node]:
        """Return every node with its full label map."""
        return self._list(label_selector=None)

    def list_by_tag_equals(self, key: str, value: str) -> List[Node]:
        """Return nodes labelled ``key=value``; empty when none match."""
        return self._list(label_selector=f"{key}={value}")

    def list_by_tag_exists(self, key: str) -> List[Node]:
        """Return nodes carrying ``key`` with any value."""
        return self._list(label_selector=key)

    def get_node_tags(self, node_id: str) -> Dict[str, str]:
        """Return the labels of a single node."""
        with control_plane_call(f"read node {node_id}", node=node_id):
            v1_node = self.core_api.read_node(node_id, _request_timeout=self.request_timeout)
        return dict(v1_node.metadata.labels or {})

    def _list(self, label_selector: Optional[str]) -> List[Node]:
        kwargs = {"_request_timeout": self.request_timeout}
        if label_selector:
            kwargs["label_selector"] = label_selector
        if self.page_size:
            kwargs["limit"] = self.page_size

        nodes: List[Node] = []
        continue_token = None
        while True:
            if continue_token:
                kwargs["_continue"] = continue_token
            with control_plane_call(f"list nodes (selector={label_selector!r})"):
                node_list = self.core_api.list_node(**kwargs)
            nodes.extend(self._to_node(item) for item in node_list.items)

            # 分页：跟随 continue 令牌直到取完
            continue_token = node_list.metadata._continue if node_list.metadata else None
            if not self.page_size or not continue_token:
                break

        logger.debug(f"Listed {len(nodes)} nodes with selector {label_selector!r}")
        return nodes

    @staticmethod
    def _to_node(v1_node) -> Node:
        return Node(name=v1_node.metadata.name, tags=dict(v1_node.metadata.labels or {}))
