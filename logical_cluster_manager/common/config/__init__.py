"""统一配置管理模块"""

from .settings import settings, ManagerSettings

__all__ = ["settings", "ManagerSettings"]
