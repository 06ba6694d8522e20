"""
Shared fixtures: an in-memory stand-in for the Kubernetes CoreV1Api node endpoints.
"""

from typing import Dict, List, Optional

import pytest
from kubernetes.client import V1ListMeta, V1Node, V1NodeList, V1ObjectMeta
from kubernetes.client.exceptions import ApiException

from logical_cluster_manager.membership import MembershipManager, NodeInventory, TagPatcher


LABEL = "logical-cluster"


class FakeCoreV1Api:
    """Node store with label selectors, paging and strategic-merge label patches."""

    def __init__(self, nodes: Optional[Dict[str, Dict[str, str]]] = None):
        self.labels: Dict[str, Dict[str, str]] = {
            name: dict(labels) for name, labels in (nodes or {}).items()
        }
        self.patch_calls: List[tuple] = []
        self.list_calls: List[dict] = []
        self.fail_on: Dict[str, Exception] = {}
        self.fail_list: Optional[Exception] = None

    def _v1_node(self, name: str) -> V1Node:
        return V1Node(metadata=V1ObjectMeta(name=name, labels=dict(self.labels[name]) or None))

    @staticmethod
    def _matches(labels: Dict[str, str], selector: Optional[str]) -> bool:
        # comma-separated requirements are ANDed, as on the API server
        if not selector:
            return True
        for term in selector.split(","):
            if "=" in term:
                key, value = term.split("=", 1)
                if labels.get(key) != value:
                    return False
            elif term not in labels:
                return False
        return True

    def list_node(self, label_selector=None, limit=None, _continue=None, _request_timeout=None):
        self.list_calls.append({
            "label_selector": label_selector,
            "limit": limit,
            "_continue": _continue,
            "_request_timeout": _request_timeout,
        })
        if self.fail_list is not None:
            raise self.fail_list

        names = [name for name, labels in self.labels.items() if self._matches(labels, label_selector)]
        start = int(_continue) if _continue else 0
        end = start + limit if limit else len(names)
        next_token = str(end) if end < len(names) else None
        return V1NodeList(
            items=[self._v1_node(name) for name in names[start:end]],
            metadata=V1ListMeta(_continue=next_token),
        )

    def read_node(self, name, _request_timeout=None):
        if name not in self.labels:
            raise ApiException(status=404, reason="Not Found")
        return self._v1_node(name)

    def patch_node(self, name, body, _request_timeout=None):
        self.patch_calls.append((name, body))
        if name in self.fail_on:
            raise self.fail_on[name]
        if name not in self.labels:
            raise ApiException(status=404, reason="Not Found")
        for key, value in body["metadata"]["labels"].items():
            if value is None:
                self.labels[name].pop(key, None)
            else:
                self.labels[name][key] = value
        return self._v1_node(name)

    def cluster_of(self, name: str) -> Optional[str]:
        return self.labels[name].get(LABEL)


@pytest.fixture
def make_core_api():
    return FakeCoreV1Api


@pytest.fixture
def core_api():
    return FakeCoreV1Api({
        "n1": {"kubernetes.io/hostname": "n1"},
        "n2": {"kubernetes.io/hostname": "n2"},
        "n3": {"kubernetes.io/hostname": "n3"},
    })


@pytest.fixture
def inventory(core_api):
    return NodeInventory(core_api, request_timeout=5, page_size=0)


@pytest.fixture
def patcher(core_api):
    return TagPatcher(core_api, request_timeout=5)


@pytest.fixture
def manager(inventory, patcher):
    return MembershipManager(inventory, patcher, label_key=LABEL)
