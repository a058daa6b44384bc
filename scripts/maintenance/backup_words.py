"""
Back up the word store.

Saves the current words and copies words.json to
backups/words-YYYYmmdd-HHMM.json inside the data directory.

Usage:
    python -m scripts.maintenance.backup_words
"""

from __future__ import annotations

import argparse
import asyncio
from pathlib import Path
from typing import Optional

from wordbook import LocalStoragePaths, WordbookError, WordRepository
from wordbook.config import configure_logging, get_settings


async def backup_words(data_dir: Optional[Path] = None) -> Path:
    """Create a backup and return its path."""
    paths = LocalStoragePaths(data_dir or get_settings().data_dir)
    async with WordRepository(paths) as repo:
        print(f"Words in store: {len(repo.cache)}")
        return await repo.backup_now()


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Back up the word store")
    parser.add_argument(
        "--data-dir",
        type=Path,
        help="Data directory (default: WORDBOOK_DATA_DIR)"
    )
    args = parser.parse_args(argv)
    configure_logging()

    try:
        backup_path = asyncio.run(backup_words(args.data_dir))
    except WordbookError as e:
        print(f"✗ Backup failed: {e}")
        return 1

    print(f"✓ Backup saved: {backup_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
