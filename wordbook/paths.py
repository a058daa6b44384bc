"""
Storage locations for the word store.

The repository only talks to the StoragePaths protocol; LocalStoragePaths
lays everything out inside one data directory:

    {data_dir}/words.json        primary store
    {data_dir}/words.json.tmp    temp file for atomic writes
    {data_dir}/words.csv         CSV mirror
    {data_dir}/backups/          timestamped copies of words.json
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Optional, Protocol

from wordbook.config import get_settings
from wordbook.constants import (
    BACKUP_TIMESTAMP_FORMAT,
    BACKUPS_DIR_NAME,
    WORDS_CSV_NAME,
    WORDS_JSON_NAME,
    WORDS_JSON_TEMP_NAME,
)


class StoragePaths(Protocol):
    """Paths used by the repository."""

    @property
    def words_json_path(self) -> Path: ...

    @property
    def words_json_temp_path(self) -> Path: ...

    @property
    def words_csv_path(self) -> Path: ...

    @property
    def backups_dir(self) -> Path: ...

    def timestamped_backup_path(self, now: Optional[datetime] = None) -> Path: ...


class LocalStoragePaths:
    """StoragePaths rooted at a local data directory."""

    def __init__(self, data_dir: Path | str):
        self.data_dir = Path(data_dir)

    @classmethod
    def from_settings(cls) -> LocalStoragePaths:
        """Use WORDBOOK_DATA_DIR (or the default data directory)."""
        return cls(get_settings().data_dir)

    @property
    def words_json_path(self) -> Path:
        return self.data_dir / WORDS_JSON_NAME

    @property
    def words_json_temp_path(self) -> Path:
        # Same directory as the primary so the rename stays on one volume
        return self.data_dir / WORDS_JSON_TEMP_NAME

    @property
    def words_csv_path(self) -> Path:
        return self.data_dir / WORDS_CSV_NAME

    @property
    def backups_dir(self) -> Path:
        """Backups directory, created if it does not exist."""
        path = self.data_dir / BACKUPS_DIR_NAME
        path.mkdir(parents=True, exist_ok=True)
        return path

    def timestamped_backup_path(self, now: Optional[datetime] = None) -> Path:
        """Path like backups/words-20240131-0930.json (minute resolution)."""
        if now is None:
            now = datetime.now()
        stem = Path(WORDS_JSON_NAME).stem
        return self.backups_dir / f"{stem}-{now.strftime(BACKUP_TIMESTAMP_FORMAT)}.json"

    def __repr__(self) -> str:
        return f"LocalStoragePaths({str(self.data_dir)!r})"
