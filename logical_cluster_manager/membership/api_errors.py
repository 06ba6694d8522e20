"""
Translation of Kubernetes client failures into ControlPlaneError.
"""

from contextlib import contextmanager
from typing import Iterator, Optional

from kubernetes.client.exceptions import ApiException
from urllib3.exceptions import HTTPError

from logical_cluster_manager.common.exception import ControlPlaneError
from logical_cluster_manager.common.logging import get_logger


logger = get_logger(__name__)


@contextmanager
def control_plane_call(action: str, node: Optional[str] = None) -> Iterator[None]:
    """Raise ControlPlaneError for any API or transport failure inside the block."""
    try:
        yield
    except ApiException as e:
        logger.error(f"Control plane rejected {action}: {e.status} {e.reason}")
        raise ControlPlaneError(f"{action} failed: {e.status} {e.reason}", node=node, status=e.status) from e
    except HTTPError as e:
        logger.error(f"Control plane unreachable during {action}: {e}")
        raise ControlPlaneError(f"{action} failed: {e}", node=node) from e
