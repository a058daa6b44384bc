"""
Export the word store to a JSON or CSV file.

Usage:
    python -m scripts.data.export_words exports/words.csv
    python -m scripts.data.export_words exports/words.json --format json
"""

from __future__ import annotations

import argparse
import asyncio
from pathlib import Path
from typing import Optional

from wordbook import LocalStoragePaths, WordRepository
from wordbook.config import configure_logging, get_settings


async def export_words(out_path: Path, fmt: str, data_dir: Optional[Path] = None) -> int:
    """
    Write all stored words to out_path.

    Returns:
        Number of exported words
    """
    paths = LocalStoragePaths(data_dir or get_settings().data_dir)

    repo = WordRepository(paths)
    await repo.open()
    text = await repo.export_structured() if fmt == "json" else await repo.export_table()
    count = len(repo.cache)
    await repo.close()

    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(text, encoding="utf-8")
    print(f"✓ Exported {count} words to {out_path}")
    return count


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Export the word store")
    parser.add_argument("out", type=Path, help="Output file")
    parser.add_argument(
        "--format",
        choices=("json", "csv"),
        help="Output format (default: from file extension, else csv)"
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        help="Data directory (default: WORDBOOK_DATA_DIR)"
    )

    args = parser.parse_args(argv)
    configure_logging()

    fmt = args.format or ("json" if args.out.suffix.lower() == ".json" else "csv")
    asyncio.run(export_words(args.out, fmt, data_dir=args.data_dir))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
