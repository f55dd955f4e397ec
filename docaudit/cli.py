"""CLI entrypoints for docaudit commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError
from .logging import configure_logging
from .orchestrator import Auditor
from .stats import SnapshotError


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docaudit",
        description="Audit TypeScript API documentation and keep fixture expectations in sync.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log records to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    stats_parser = subparsers.add_parser(
        "stats",
        help="Collect documentation-quality stats into a snapshot file.",
    )
    _add_verbose_option(stats_parser, suppress_default=True)
    stats_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the source root (defaults to current directory).",
    )
    stats_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Where to write the snapshot (defaults to .docaudit/stats.json).",
    )

    sync_parser = subparsers.add_parser(
        "sync-fixtures",
        help="Rewrite `// Expected issues:` blocks from a stats snapshot.",
    )
    _add_verbose_option(sync_parser, suppress_default=True)
    sync_parser.add_argument(
        "snapshot",
        nargs="?",
        type=Path,
        default=None,
        help="Snapshot file to read (defaults to the configured snapshot).",
    )
    sync_parser.add_argument(
        "--root",
        type=Path,
        default=None,
        help="Directory snapshot paths are resolved against.",
    )
    sync_parser.add_argument(
        "--strip-prefix",
        default=None,
        help="Package-relative prefix removed from snapshot paths before resolving.",
    )
    sync_parser.add_argument(
        "--config",
        type=Path,
        default=Path("."),
        help="Directory holding .docaudit.yml (defaults to current directory).",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for docaudit commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    auditor = Auditor()

    if args.command == "stats":
        try:
            outcome = auditor.run_stats(args.path, args.output)
        except (FileNotFoundError, NotADirectoryError) as exc:
            parser.exit(1, f"{exc}\n")
        except ConfigError as exc:
            parser.exit(1, f"docaudit stats failed: {exc}\n")
        print(f"Stats written to {_relativize(outcome.path)}")
    elif args.command == "sync-fixtures":
        try:
            updated = auditor.run_sync(
                args.snapshot,
                config_dir=args.config,
                root=args.root,
                strip_prefix=args.strip_prefix,
            )
        except (SnapshotError, ConfigError) as exc:
            parser.exit(1, f"{exc}\n")
        for path in updated:
            print(f"Updated: {_relativize(path)}")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
