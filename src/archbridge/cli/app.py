"""CLI app entrypoint and error mapping."""

from __future__ import annotations

import sys

from archbridge.contracts.exceptions import (
    AuthenticationError,
    ConfigError,
    HierarchyValidationError,
    ProviderError,
    SyncError,
)


def main(argv: list[str] | None = None) -> int:
    import archbridge.cli as cli

    parser = cli.build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        cli.logging.basicConfig(level=cli.logging.DEBUG, format="%(name)s %(message)s", stream=sys.stderr)

    try:
        if args.command == "hierarchy":
            cli.asyncio.run(cli._run_hierarchy(args))
        elif args.command == "sync":
            cli.asyncio.run(cli._run_sync(args))
        return 0
    except (ConfigError, HierarchyValidationError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 3
    except (AuthenticationError, ProviderError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 4
    except SyncError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 5
    except Exception as exc:  # pragma: no cover - unexpected failure
        print(f"error: {exc}", file=sys.stderr)
        return 1


__all__ = ["main"]
