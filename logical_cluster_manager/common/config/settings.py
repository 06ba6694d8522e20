"""
统一参数管理模块 - logical cluster manager settings

Three configuration layers (highest precedence first):
1. Environment variables LOGICAL_CLUSTER_*
2. YAML file (~/.logical_cluster/settings.yaml or a path passed to load())
3. Code defaults

Example:
    from logical_cluster_manager.common.config import settings

    print(settings.CLUSTER_LABEL_KEY)  # logical-cluster

    # export LOGICAL_CLUSTER_REQUEST_TIMEOUT=10
    print(settings.REQUEST_TIMEOUT)  # 10.0

    # settings.load("/path/to/settings.yaml")
"""

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


logger = logging.getLogger(__name__)

ENV_PREFIX = "LOGICAL_CLUSTER_"
DEFAULT_SETTINGS_FILE = Path.home() / ".logical_cluster" / "settings.yaml"


@dataclass
class ManagerSettings:
    """
    Runtime settings of the logical cluster manager.

    Attributes:
        CLUSTER_LABEL_KEY: node label that encodes logical-cluster membership
        KUBECONFIG: kubeconfig path; None means discover it
        KUBE_CONTEXT: kubeconfig context; None means the current context
        REQUEST_TIMEOUT: per-request timeout handed to the Kubernetes client (seconds)
        LIST_PAGE_SIZE: page size for node listings; 0 lists in a single request
        LOG_LEVEL: logging level used by the CLI
    """

    CLUSTER_LABEL_KEY: str = "logical-cluster"
    KUBECONFIG: Optional[str] = None
    KUBE_CONTEXT: Optional[str] = None
    REQUEST_TIMEOUT: float = 30.0
    LIST_PAGE_SIZE: int = 0
    LOG_LEVEL: str = "INFO"

    _config_file: Optional[str] = field(default=None, repr=False)

    def load(self, config_file: Optional[str] = None) -> "ManagerSettings":
        """
        Load settings from a YAML file, then apply environment overrides.

        Args:
            config_file: settings file path; defaults to
                ~/.logical_cluster/settings.yaml

        Returns:
            self
        """
        self._load_from_file(config_file)
        self._load_from_env()
        return self

    def _load_from_file(self, config_file: Optional[str] = None) -> None:
        """Load values from a YAML file."""
        config_path = Path(config_file) if config_file else DEFAULT_SETTINGS_FILE
        if not config_path.exists():
            return

        self._config_file = str(config_path)
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                config_data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to load settings file {config_path}: {e}")
            return

        if not isinstance(config_data, dict):
            logger.warning(f"Ignoring settings file {config_path}: top level is not a mapping")
            return

        defaults = self._get_defaults()
        for key, value in config_data.items():
            if not isinstance(key, str) or key.upper() not in defaults:
                logger.warning(f"Ignoring unknown setting {key!r} in {config_path}")
                continue
            name = key.upper()
            try:
                setattr(self, name, self._coerce_file_value(value, defaults[name]))
            except ValueError:
                logger.warning(f"Ignoring setting {key!r} in {config_path}: cannot convert {value!r}")

    def _coerce_file_value(self, value: Any, default: Any) -> Any:
        """Bring a YAML value to the type of its default."""
        if value is None or default is None or (isinstance(value, type(default)) and not isinstance(value, bool)):
            return value
        return self._convert_value(str(value), default)

    def _load_from_env(self) -> None:
        """Apply LOGICAL_CLUSTER_* environment overrides."""
        for key, default_value in self._get_defaults().items():
            env_value = os.environ.get(f"{ENV_PREFIX}{key}")
            if env_value is not None:
                setattr(self, key, self._convert_value(env_value, default_value))

    def _get_defaults(self) -> Dict[str, Any]:
        """Defaults of all public settings."""
        return {f.name: f.default for f in fields(self) if not f.name.startswith("_")}

    def _convert_value(self, value: str, default: Any) -> Any:
        """Convert an environment string to the type of its default."""
        if isinstance(default, bool):
            return value.lower() in ("true", "1", "yes")
        elif isinstance(default, int):
            return int(value)
        elif isinstance(default, float):
            return float(value)
        else:
            return value

    def to_dict(self) -> Dict[str, Any]:
        """Export the effective settings."""
        return {k: getattr(self, k) for k in self._get_defaults().keys()}


# 全局单例 - 导入时自动加载
settings = ManagerSettings()
settings.load()
