"""Hierarchy command."""

from __future__ import annotations

import argparse
import json
from typing import Any

from archbridge.contracts.exceptions import HierarchyValidationError
from archbridge.hierarchy import find_initiative


async def run_hierarchy(args: argparse.Namespace) -> Any:
    import archbridge.cli as cli

    config = cli.load_config(args.config)
    bridge = await cli.ArchBridge.from_config(config)
    forest = await bridge.fetch_hierarchy(args.workspace)

    if args.initiative:
        initiative = find_initiative(forest, args.initiative)
        if initiative is None:
            raise HierarchyValidationError(f"Initiative with id {args.initiative} not found", node_id=args.initiative)
        payload: Any = initiative.model_dump(mode="json", by_alias=True)
    else:
        payload = [domain.model_dump(mode="json", by_alias=True) for domain in forest]

    print(json.dumps(payload, indent=2))
    return payload


__all__ = ["run_hierarchy"]
