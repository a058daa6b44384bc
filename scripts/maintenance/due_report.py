"""
Show words that are due for review.

Usage:
    python -m scripts.maintenance.due_report [--limit N]
"""

from __future__ import annotations

import argparse
import asyncio
from datetime import datetime
from pathlib import Path
from typing import Optional

from wordbook import LocalStoragePaths, WordEntry, WordRepository, due_for_review, now_ms
from wordbook.config import configure_logging, get_settings


async def load_due_words(data_dir: Optional[Path] = None, now: Optional[int] = None) -> list[WordEntry]:
    """Load the store and return due words, earliest first."""
    paths = LocalStoragePaths(data_dir or get_settings().data_dir)
    repo = WordRepository(paths)
    await repo.open()
    await repo.close()
    return due_for_review(repo.cache, now)


def format_due_line(entry: WordEntry, now: int) -> str:
    due_at = datetime.fromtimestamp(entry.next_review_epoch / 1000)
    overdue_days = (now - entry.next_review_epoch) // 86_400_000
    return (
        f"  {entry.term:<25} stage {entry.review_stage}  "
        f"due {due_at:%Y-%m-%d %H:%M} ({overdue_days}d overdue)"
    )


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="List words due for review")
    parser.add_argument(
        "--limit",
        type=int,
        default=20,
        help="Maximum number of words to show (default: 20)"
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        help="Data directory (default: WORDBOOK_DATA_DIR)"
    )
    args = parser.parse_args(argv)
    configure_logging()

    now = now_ms()
    due = asyncio.run(load_due_words(args.data_dir, now))

    print(f"Due for review: {len(due)}")
    for entry in due[:args.limit]:
        print(format_due_line(entry, now))
    if len(due) > args.limit:
        print(f"  ... and {len(due) - args.limit} more")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
