"""
Kubernetes client configuration for the logical cluster manager.
"""

import os
from pathlib import Path
from typing import List, Optional

from kubernetes import client, config
from kubernetes.config import ConfigException

from logical_cluster_manager.common.config import settings
from logical_cluster_manager.common.exception import ConfigurationError
from logical_cluster_manager.common.logging import get_logger


logger = get_logger(__name__)


class KubeConfigManager:
    """Locates a kubeconfig and builds an authenticated CoreV1Api."""

    def __init__(self, config_file_path: Optional[str] = None, context: Optional[str] = None):
        """
        Initialize the configuration manager.

        Args:
            config_file_path (str, optional): Path to a kubeconfig file. If not
                provided, the settings, the KUBECONFIG environment variable and
                ~/.kube/config are tried in that order, and in-cluster service
                account credentials are used when none of them exists.
            context (str, optional): kubeconfig context to use.
        """
        self.config_file_path = config_file_path
        self.context = context or settings.KUBE_CONTEXT

    def _candidate_paths(self) -> List[Path]:
        candidates = []
        if self.config_file_path:
            candidates.append(Path(self.config_file_path).expanduser())
        if settings.KUBECONFIG:
            candidates.append(Path(settings.KUBECONFIG).expanduser())
        # KUBECONFIG may hold several paths; the first one is used
        env_config = os.environ.get("KUBECONFIG")
        if env_config:
            candidates.append(Path(env_config.split(os.pathsep)[0]).expanduser())
        candidates.append(Path.home() / ".kube" / "config")
        return candidates

    def find_config_file(self) -> Optional[str]:
        """Return the first existing kubeconfig, or None."""
        if self.config_file_path and not Path(self.config_file_path).expanduser().exists():
            raise ConfigurationError(f"kubeconfig {self.config_file_path} does not exist")

        for path in self._candidate_paths():
            if path.exists():
                return str(path)
        return None

    def create_api_client(self) -> client.ApiClient:
        config_file = self.find_config_file()

        if config_file:
            logger.info(f"Loading kubeconfig from {config_file}")
            try:
                return config.new_client_from_config(config_file=config_file, context=self.context)
            except ConfigException as e:
                raise ConfigurationError(f"invalid kubeconfig {config_file}: {e}") from e

        logger.info("No kubeconfig found, falling back to in-cluster configuration")
        configuration = client.Configuration()
        try:
            config.load_incluster_config(client_configuration=configuration)
        except ConfigException as e:
            raise ConfigurationError(f"no kubeconfig found and in-cluster configuration failed: {e}") from e
        return client.ApiClient(configuration)

    def create_core_api(self) -> client.CoreV1Api:
        return client.CoreV1Api(self.create_api_client())
