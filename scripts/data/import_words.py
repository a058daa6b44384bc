"""
Import words into the local word store.

This script:
1. Reads a JSON, CSV or quick-text file ("term — meaning" per line)
2. Replaces the stored words, or merges by term with --merge
   (quick text always merges)
3. Saves words.json and the words.csv mirror

Usage:
    python -m scripts.data.import_words data/new_words.csv --merge
    python -m scripts.data.import_words notes.txt --format text --dry-run
"""

from __future__ import annotations

import argparse
import asyncio
from pathlib import Path
from typing import Optional

from wordbook import LocalStoragePaths, WordRepository
from wordbook.config import configure_logging, get_settings

FORMATS = ("json", "csv", "text")

SUFFIX_FORMATS = {
    ".json": "json",
    ".csv": "csv",
    ".txt": "text",
}


def detect_format(path: Path, requested: Optional[str] = None) -> str:
    """Pick the import format from --format or the file extension."""
    if requested:
        return requested
    fmt = SUFFIX_FORMATS.get(path.suffix.lower())
    if fmt is None:
        raise ValueError(
            f"Cannot tell the format of {path.name}; use --format {{{','.join(FORMATS)}}}"
        )
    return fmt


async def import_words(
    path: Path,
    fmt: str,
    merge: bool = False,
    dry_run: bool = False,
    data_dir: Optional[Path] = None
) -> int:
    """
    Import a file into the word store.

    Args:
        path: File to import
        fmt: "json", "csv" or "text"
        merge: Merge by term instead of replacing all words
        dry_run: If True, import into memory only and don't save
        data_dir: Data directory (defaults to WORDBOOK_DATA_DIR)

    Returns:
        Number of entries read from the file
    """
    settings = get_settings()
    paths = LocalStoragePaths(data_dir or settings.data_dir)
    text = path.read_text(encoding="utf-8")

    repo = WordRepository(paths, save_delay_ms=settings.save_delay_ms)
    await repo.open()
    before = len(repo.cache)
    print(f"Loaded {before} words from {paths.words_json_path}")

    if fmt == "json":
        count = await repo.import_from_structured(text, merge=merge)
    elif fmt == "csv":
        count = await repo.import_from_table(text, merge=merge)
    else:
        count = await repo.import_from_quick_text(text)

    if count and not dry_run:
        await repo.save_now()
    await repo.close()

    print(f"\n{'='*60}")
    print("Import complete!")
    print(f"{'='*60}")
    print(f"Entries in file:  {count}")
    print(f"Words before:     {before}")
    print(f"Words after:      {len(repo.cache)}")

    if dry_run:
        print("\n⚠ DRY RUN MODE - No changes were saved")

    return count


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Import words into the word store")
    parser.add_argument("path", type=Path, help="File to import")
    parser.add_argument(
        "--format",
        choices=FORMATS,
        help="Input format (default: from file extension)"
    )
    parser.add_argument(
        "--merge",
        action="store_true",
        help="Merge by term instead of replacing all words"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Don't save the result"
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        help="Data directory (default: WORDBOOK_DATA_DIR)"
    )

    args = parser.parse_args(argv)
    configure_logging()

    if not args.path.exists():
        parser.error(f"File not found: {args.path}")

    try:
        fmt = detect_format(args.path, args.format)
    except ValueError as e:
        parser.error(str(e))

    count = asyncio.run(import_words(
        args.path,
        fmt,
        merge=args.merge,
        dry_run=args.dry_run,
        data_dir=args.data_dir
    ))
    return 0 if count else 1


if __name__ == "__main__":
    raise SystemExit(main())
