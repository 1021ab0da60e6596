"""Sync command formatting."""

from __future__ import annotations

import argparse

from archbridge.cli.common import format_type_breakdown, plural
from archbridge.cli.progress import JsonLinesProgressSink, RichProgressSink
from archbridge.contracts.sync import SyncSummary
from archbridge.hierarchy import count_descendants


def format_sync_summary(summary: SyncSummary, *, project: str, dry_run: bool) -> str:
    mode = "dry-run" if dry_run else "apply"
    lines = [
        "",
        f"archbridge - sync complete ({mode})",
        "",
        f"  Project:   {project}",
    ]
    if summary.deleted is not None:
        lines.append(f"  Deleted:   {plural(summary.deleted, 'existing work item')}")

    lines.append(
        "  Items:     {} total ({})".format(
            summary.total,
            format_type_breakdown(
                epics=summary.epics.total,
                features=summary.features.total,
                user_stories=summary.user_stories.total,
            ),
        )
    )
    if summary.created:
        created_breakdown = format_type_breakdown(
            epics=summary.epics.created,
            features=summary.features.created,
            user_stories=summary.user_stories.created,
        )
        lines.append(f"  Created:   {summary.created} ({created_breakdown})")
    if summary.failed:
        failed_breakdown = format_type_breakdown(
            epics=summary.epics.failed,
            features=summary.features.failed,
            user_stories=summary.user_stories.failed,
        )
        lines.append(f"  Failed:    {summary.failed} ({failed_breakdown})")

    if dry_run:
        lines.append("")
        lines.append("  [dry-run] No changes were made")

    lines.append("")
    return "\n".join(lines)


async def run_sync(args: argparse.Namespace) -> SyncSummary:
    import archbridge.cli as cli

    config = cli.load_config(args.config)
    bridge = await cli.ArchBridge.from_config(config)
    epics = await bridge.initiative_epics(args.workspace, args.initiative)

    if args.json:
        bridge = await cli.ArchBridge.from_config(config, progress=JsonLinesProgressSink())
        return await bridge.sync(args.project, epics, overwrite=args.overwrite, dry_run=args.dry_run)

    if not args.verbose:
        total_items = sum(1 + count_descendants(epic) for epic in epics)
        with RichProgressSink(total_items=total_items) as progress:
            bridge = await cli.ArchBridge.from_config(config, progress=progress)
            summary = await bridge.sync(args.project, epics, overwrite=args.overwrite, dry_run=args.dry_run)
    else:
        summary = await bridge.sync(args.project, epics, overwrite=args.overwrite, dry_run=args.dry_run)

    print(cli._format_summary(summary, project=args.project, dry_run=args.dry_run))
    return summary


__all__ = ["format_sync_summary", "run_sync"]
