"""
Command-line entry point for the logical cluster manager.
"""

import argparse
import json
import sys
from typing import Any, List, Optional

from logical_cluster_manager.common.config import settings
from logical_cluster_manager.common.exception import (
    ClusterNotFound,
    ConfigurationError,
    ControlPlaneError,
    InvalidClusterName,
    NoClustersExist,
)
from logical_cluster_manager.common.logging import configure_logging, get_logger
from logical_cluster_manager.common.model import ScaleDirection
from logical_cluster_manager.control_plane.admin_api import AdminAPI
from logical_cluster_manager.control_plane.config import KubeConfigManager
from logical_cluster_manager.membership import MembershipManager, NodeInventory, TagPatcher


logger = get_logger(__name__)

EXIT_OK = 0
EXIT_DOMAIN_ERROR = 1
EXIT_CONTROL_PLANE_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="logical-cluster",
        description="Partition Kubernetes nodes into logical clusters using a node label.",
    )
    parser.add_argument("--kubeconfig", help="path to the kubeconfig file")
    parser.add_argument("--context", help="kubeconfig context to use")
    parser.add_argument("--settings-file", help="YAML settings file")
    parser.add_argument("--log-level", help="logging level (default: settings LOG_LEVEL)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    create = subparsers.add_parser("create", help="label nodes into a logical cluster")
    create.add_argument("name")
    create.add_argument("nodes", nargs="+")

    get = subparsers.add_parser("get", help="show one logical cluster")
    get.add_argument("name")

    subparsers.add_parser("list", help="list all logical clusters")

    delete = subparsers.add_parser("delete", help="remove the label from every member")
    delete.add_argument("name")

    rename = subparsers.add_parser("rename", help="relabel the given nodes with a new name")
    rename.add_argument("new_name")
    rename.add_argument("nodes", nargs="+")

    scale = subparsers.add_parser("scale", help="add nodes to or remove nodes from a logical cluster")
    scale.add_argument("name")
    scale.add_argument("direction", choices=ScaleDirection.ALL)
    scale.add_argument("nodes", nargs="+")

    nodes = subparsers.add_parser("nodes", help="list nodes and their logical cluster")
    nodes.add_argument("node", nargs="?", help="show a single node")

    return parser


def build_admin_api(args: argparse.Namespace) -> AdminAPI:
    core_api = KubeConfigManager(config_file_path=args.kubeconfig, context=args.context).create_core_api()
    inventory = NodeInventory(core_api)
    patcher = TagPatcher(core_api)
    return AdminAPI(MembershipManager(inventory, patcher), inventory)


def run_command(admin_api: AdminAPI, args: argparse.Namespace) -> Any:
    if args.command == "create":
        return admin_api.create_cluster(args.name, args.nodes)
    if args.command == "get":
        return admin_api.get_cluster(args.name)
    if args.command == "list":
        return admin_api.list_clusters()
    if args.command == "delete":
        return admin_api.delete_cluster(args.name)
    if args.command == "rename":
        return admin_api.rename_cluster(args.new_name, args.nodes)
    if args.command == "scale":
        return admin_api.scale_cluster(args.name, args.nodes, args.direction)
    if args.command == "nodes":
        if args.node:
            return admin_api.describe_node(args.node)
        return admin_api.list_nodes()
    raise ValueError(f"unknown command {args.command!r}")


def _report_error(e: Exception) -> None:
    print(json.dumps({"error": type(e).__name__, "message": str(e)}), file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the logical cluster CLI."""
    args = build_parser().parse_args(argv)

    if args.settings_file:
        settings.load(args.settings_file)
    configure_logging(args.log_level or settings.LOG_LEVEL)

    try:
        admin_api = build_admin_api(args)
        result = run_command(admin_api, args)
    except (ClusterNotFound, NoClustersExist, InvalidClusterName) as e:
        logger.error(str(e))
        _report_error(e)
        return EXIT_DOMAIN_ERROR
    except (ControlPlaneError, ConfigurationError) as e:
        logger.error(f"{args.command} failed: {e}")
        _report_error(e)
        return EXIT_CONTROL_PLANE_ERROR

    print(json.dumps(result, indent=2, ensure_ascii=False))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
