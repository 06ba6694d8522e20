"""
Core data models for the logical cluster manager.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from logical_cluster_manager.common.exception import InvalidClusterName


DEFAULT_CLUSTER_LABEL = "logical-cluster"

# Kubernetes label value syntax
_LABEL_VALUE_RE = re.compile(r"^[A-Za-z0-9]([-A-Za-z0-9_.]*[A-Za-z0-9])?$")
_LABEL_VALUE_MAX_LEN = 63


class ScaleDirection:
    """Direction of a scale operation."""
    EXPAND = "expand"   # 扩容：给节点打上集群标签
    SHRINK = "shrink"   # 缩容：移除节点上的集群标签

    ALL = (EXPAND, SHRINK)

    @classmethod
    def validate(cls, direction: str) -> str:
        if direction not in cls.ALL:
            raise ValueError(f"unknown scale direction {direction!r}, expected one of {cls.ALL}")
        return direction


def validate_cluster_name(name: str) -> str:
    """Check that ``name`` can be stored as a node label value."""
    if not isinstance(name, str) or len(name) > _LABEL_VALUE_MAX_LEN or not _LABEL_VALUE_RE.match(name):
        raise InvalidClusterName(name)
    return name


@dataclass
class Node:
    """A node as seen by the control plane, reduced to its name and labels."""
    name: str
    tags: Dict[str, str] = field(default_factory=dict)

    def tag(self, key: str) -> Optional[str]:
        return self.tags.get(key)


@dataclass
class LogicalCluster:
    """Derived view of the nodes that currently carry one cluster label value."""
    name: str
    members: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"cluster_name": self.name, "hosts": list(self.members)}


@dataclass(frozen=True)
class SetTagPatch:
    """Create or overwrite one label on a node."""
    key: str
    value: str

    def body(self) -> Dict[str, Any]:
        return {"metadata": {"labels": {self.key: self.value}}}


@dataclass(frozen=True)
class RemoveTagPatch:
    """Delete one label from a node.

    A null value in a strategic merge patch deletes the key when present and
    leaves the label map unchanged when it is absent.
    """
    key: str

    def body(self) -> Dict[str, Any]:
        return {"metadata": {"labels": {self.key: None}}}
