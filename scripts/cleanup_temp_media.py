"""Cron entry point for sweeping stale editor uploads."""

from __future__ import annotations

import argparse
import asyncio
import sys
from dataclasses import dataclass
from datetime import datetime, timedelta

from src.studio.config import load_config
from src.studio.logging import configure_logging
from src.studio.media.retention import RetentionSweeper
from src.studio.storage.storage_factory import create_storage


@dataclass(slots=True)
class CleanupSummary:
    scanned: int
    removed: int
    failed: int
    dry_run: bool


def perform_cleanup(*, dry_run: bool, reference_time: datetime | None = None) -> CleanupSummary:
    """Execute the sweep and return summary counters."""
    config = load_config()
    sweeper = RetentionSweeper(
        store=create_storage(config.storage),
        temp_prefix=config.media.temp_prefix,
        retention=timedelta(days=config.media.temp_retention_days),
        page_size=config.media.sweep_page_size,
    )
    result = asyncio.run(sweeper.sweep(reference_time, dry_run=dry_run))
    removed = len(result.candidates) if dry_run else result.deleted_count
    return CleanupSummary(
        scanned=result.scanned,
        removed=removed,
        failed=len(result.errors),
        dry_run=dry_run,
    )


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Delete temp editor images past the retention window.")
    parser.add_argument("--dry-run", action="store_true", help="Only report counts without deleting files.")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv or [])
    configure_logging()
    try:
        summary = perform_cleanup(dry_run=args.dry_run)
    except Exception as exc:
        print(f"cleanup failed: {exc}", file=sys.stderr)
        return 2

    if summary.dry_run:
        print(
            f"cleanup dry-run, scanned={summary.scanned}, temp_expired={summary.removed}",
            file=sys.stdout,
        )
    else:
        print(
            f"cleanup done, scanned={summary.scanned}, temp_removed={summary.removed}, failed={summary.failed}",
            file=sys.stdout,
        )
    return 1 if summary.failed else 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
