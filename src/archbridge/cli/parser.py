"""CLI parser construction."""

from __future__ import annotations

import argparse
from importlib.metadata import PackageNotFoundError, version


def _package_version() -> str:
    try:
        return version("archbridge")
    except PackageNotFoundError:
        return "0.0.0"


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", default="./archbridge.json", help="Path to archbridge.json")
    parser.add_argument("--workspace", required=True, help="Ardoq workspace id")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="archbridge")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_package_version()}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    hierarchy_parser = subparsers.add_parser("hierarchy", help="Print the component hierarchy of a workspace")
    _add_common(hierarchy_parser)
    hierarchy_parser.add_argument("--initiative", default=None, help="Print only this Initiative's subtree")

    sync_parser = subparsers.add_parser("sync", help="Replicate an Initiative's Epics into Azure DevOps")
    _add_common(sync_parser)
    sync_parser.add_argument("--initiative", required=True, help="Ardoq Initiative id")
    sync_parser.add_argument("--project", required=True, help="Azure DevOps project name")
    mode = sync_parser.add_mutually_exclusive_group(required=True)
    mode.add_argument("--dry-run", action="store_true", help="Preview mode, no remote writes")
    mode.add_argument("--apply", action="store_true", help="Apply mode")
    sync_parser.add_argument(
        "--overwrite",
        action="store_true",
        default=False,
        help="Delete every existing work item of the project before creating",
    )
    sync_parser.add_argument("--json", action="store_true", help="Stream progress events as JSON lines")

    return parser


__all__ = ["build_parser"]
