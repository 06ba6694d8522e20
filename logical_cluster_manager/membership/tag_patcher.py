"""
Single-node label mutations.
"""

from typing import Optional, Union

from kubernetes.client import CoreV1Api

from logical_cluster_manager.common.config import settings
from logical_cluster_manager.common.logging import get_logger
from logical_cluster_manager.common.model import RemoveTagPatch, SetTagPatch
from logical_cluster_manager.membership.api_errors import control_plane_call


logger = get_logger(__name__)

TagPatch = Union[SetTagPatch, RemoveTagPatch]


class TagPatcher:
    """Applies one label patch to one node per call. Stateless."""

    def __init__(self, core_api: CoreV1Api, request_timeout: Optional[float] = None):
        self.core_api = core_api
        self.request_timeout = settings.REQUEST_TIMEOUT if request_timeout is None else request_timeout

    def set_tag(self, node_id: str, key: str, value: str) -> None:
        """Create or overwrite ``key`` on the node."""
        self.apply(node_id, SetTagPatch(key=key, value=value))

    def remove_tag(self, node_id: str, key: str) -> None:
        """Remove ``key`` from the node. Succeeds when the label is already absent."""
        self.apply(node_id, RemoveTagPatch(key=key))

    def apply(self, node_id: str, patch: TagPatch) -> None:
        logger.debug(f"Patching node {node_id}: {patch}")
        with control_plane_call(f"patch node {node_id}", node=node_id):
            # dict body -> strategic merge patch
            self.core_api.patch_node(node_id, patch.body(), _request_timeout=self.request_timeout)
