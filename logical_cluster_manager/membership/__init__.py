# Membership management: node queries, label patches and cluster operations

from .node_inventory import NodeInventory
from .tag_patcher import TagPatcher
from .membership_manager import MembershipManager

__all__ = [
    "NodeInventory",
    "TagPatcher",
    "MembershipManager",
]
