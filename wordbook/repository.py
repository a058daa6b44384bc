"""
Word Repository - cached, file-backed store of word entries.

Holds the authoritative in-memory list of entries and keeps it in sync
with disk:

- load: read words.json once (missing or broken file -> empty store)
- mutations: update the cache, notify listeners, schedule a save
- save: debounced; JSON goes to a temp file that is renamed over
  words.json, then the CSV mirror is rewritten
- backup: copy words.json into the backups directory
- import: JSON / CSV / quick text, replacing or merging by term

All methods run on one asyncio event loop; file I/O happens in worker
threads via asyncio.to_thread.

Usage:
    async with WordRepository(LocalStoragePaths.from_settings()) as repo:
        await repo.add(WordEntry(term="lopen", meaning="to walk"))
        await repo.save_now()
"""

from __future__ import annotations

import asyncio
import logging
import os
import shutil
from pathlib import Path
from typing import Callable, Iterable, Optional

from wordbook.constants import DEFAULT_SAVE_DELAY_MS
from wordbook.converters import (
    collection_to_structured_text,
    collection_to_table,
    quick_text_to_collection,
    structured_text_to_collection,
    table_to_collection,
)
from wordbook.paths import StoragePaths
from wordbook.schemas import WordEntry

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class WordbookError(RuntimeError):
    """Base class for errors reported to callers."""


class StorageError(WordbookError):
    """Writing the word files failed."""


class BackupError(WordbookError):
    """Creating a backup failed."""


class WordRepository:
    """
    Repository for word entries with debounced, atomic persistence.

    Args:
        paths: Storage locations
        save_delay_ms: Debounce window for saves (default 600 ms)
    """

    def __init__(self, paths: StoragePaths, save_delay_ms: Optional[int] = None):
        self.paths = paths
        self.save_delay = (
            DEFAULT_SAVE_DELAY_MS if save_delay_ms is None else save_delay_ms
        ) / 1000

        self._cache: list[WordEntry] = []
        self._is_loaded = False
        self._load_task: Optional[asyncio.Task] = None
        self._save_handle: Optional[asyncio.TimerHandle] = None
        self._save_tasks: set[asyncio.Task] = set()
        self._save_lock = asyncio.Lock()
        self._listeners: list[Listener] = []

    # ---- State ----

    @property
    def cache(self) -> tuple[WordEntry, ...]:
        """Read-only snapshot of the current entries."""
        return tuple(self._cache)

    @property
    def is_loaded(self) -> bool:
        return self._is_loaded

    @property
    def has_pending_save(self) -> bool:
        return self._save_handle is not None

    def get(self, entry_id: str) -> Optional[WordEntry]:
        """Get an entry by id, or None if not found."""
        return next((entry for entry in self._cache if entry.id == entry_id), None)

    # ---- Listeners ----

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener called after every change to the cache.

        Returns:
            Function that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify_listeners(self) -> None:
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                logger.exception("Listener %r failed", listener)

    # ---- Lifecycle ----

    async def open(self) -> WordRepository:
        await self.load()
        return self

    async def close(self, flush: bool = False) -> None:
        """
        Cancel the pending save and wait for saves already running.

        Args:
            flush: Write the pending changes before closing
        """
        if flush and self._save_handle is not None:
            await self.save_now()
        self._cancel_pending_save()

        if self._save_tasks:
            await asyncio.gather(*self._save_tasks, return_exceptions=True)

    async def __aenter__(self) -> WordRepository:
        return await self.open()

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close(flush=exc_type is None)

    # ---- Loading ----

    async def load(self) -> None:
        """
        Load entries from words.json.

        Only the first call reads the file; later calls return immediately
        and concurrent calls wait for the load in flight. An unreadable file
        leaves the store empty instead of raising.
        """
        if self._is_loaded:
            return

        if self._load_task is None:
            self._load_task = asyncio.ensure_future(self._load())

        task = self._load_task
        try:
            await asyncio.shield(task)
        finally:
            if task.done() and self._load_task is task:
                self._load_task = None

    async def _load(self) -> None:
        json_path = self.paths.words_json_path
        try:
            text = await asyncio.to_thread(_read_text_if_exists, json_path)
            if text is None:
                self._cache = []
                logger.info("No word file at %s, starting empty", json_path)
            else:
                self._cache = structured_text_to_collection(text)
                logger.info("Loaded %d entries from %s", len(self._cache), json_path)
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Error loading word entries from %s: %s", json_path, e)
            self._cache = []
        except Exception:
            logger.exception("Error loading word entries from %s", json_path)
            self._cache = []

        self._is_loaded = True
        self._notify_listeners()

    async def _ensure_loaded(self) -> None:
        if not self._is_loaded:
            await self.load()

    # ---- Mutations ----

    async def add(self, entry: WordEntry) -> None:
        await self._ensure_loaded()
        self._cache.append(entry)
        self._changed()

    async def add_all(self, entries: Iterable[WordEntry]) -> None:
        await self._ensure_loaded()
        self._cache.extend(entries)
        self._changed()

    async def update(self, entry: WordEntry) -> None:
        """Replace the entry with the same id (no-op if there is none)."""
        await self._ensure_loaded()
        for index, existing in enumerate(self._cache):
            if existing.id == entry.id:
                self._cache[index] = entry
                self._changed()
                return

    async def remove(self, entry_id: str) -> None:
        """Remove all entries with the given id (no-op if there are none)."""
        await self._ensure_loaded()
        remaining = [entry for entry in self._cache if entry.id != entry_id]
        if len(remaining) != len(self._cache):
            self._cache = remaining
            self._changed()

    def _changed(self) -> None:
        # Listeners first, then the (debounced) write
        self._notify_listeners()
        self.schedule_save()

    # ---- Saving ----

    def schedule_save(self) -> None:
        """
        (Re)start the debounce timer.

        Every call restarts the countdown, so a burst of changes results in
        a single write carrying the cache as it is when the write runs.
        """
        self._cancel_pending_save()
        loop = asyncio.get_running_loop()
        self._save_handle = loop.call_later(self.save_delay, self._on_save_timer)

    def _cancel_pending_save(self) -> None:
        if self._save_handle is not None:
            self._save_handle.cancel()
            self._save_handle = None

    def _on_save_timer(self) -> None:
        self._save_handle = None
        task = asyncio.ensure_future(self._save())
        self._save_tasks.add(task)
        task.add_done_callback(self._on_save_done)

    def _on_save_done(self, task: asyncio.Task) -> None:
        self._save_tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            # Traceback already logged in _save
            logger.warning("Debounced save failed: %s", task.exception())

    async def save_now(self) -> None:
        """
        Write the current entries immediately, dropping any pending timer.

        Raises:
            StorageError: If the JSON file or the CSV mirror cannot be written
        """
        self._cancel_pending_save()
        await self._save()

    async def _save(self) -> None:
        # One writer at a time: saves share the temp file. The snapshot is
        # taken under the lock so the last write carries the newest cache.
        async with self._save_lock:
            snapshot = list(self._cache)
            json_text = collection_to_structured_text(snapshot)
            csv_text = collection_to_table(snapshot)
            try:
                await asyncio.to_thread(self._write_files, json_text, csv_text)
            except OSError as e:
                logger.exception("Error saving dictionary data")
                raise StorageError(f"Could not save word entries: {e}") from e

        logger.debug(
            "Saved %d entries. JSON: %s, CSV: %s",
            len(snapshot),
            self.paths.words_json_path,
            self.paths.words_csv_path,
        )

    def _write_files(self, json_text: str, csv_text: str) -> None:
        json_path = self.paths.words_json_path
        temp_path = self.paths.words_json_temp_path
        csv_path = self.paths.words_csv_path

        json_path.parent.mkdir(parents=True, exist_ok=True)
        csv_path.parent.mkdir(parents=True, exist_ok=True)

        # Write temp file, then rename over the primary in one step
        with open(temp_path, "w", encoding="utf-8") as f:
            f.write(json_text)
            f.flush()
            os.fsync(f.fileno())
        os.replace(temp_path, json_path)

        # CSV mirror (not atomic)
        with open(csv_path, "w", encoding="utf-8", newline="") as f:
            f.write(csv_text)

    # ---- Backup ----

    async def backup_now(self) -> Path:
        """
        Save, then copy words.json into the backups directory.

        Returns:
            Path of the backup file

        Raises:
            StorageError: If saving fails
            BackupError: If there is no data file or the copy fails
        """
        await self.save_now()

        json_path = self.paths.words_json_path
        try:
            backup_path = await asyncio.to_thread(self._copy_backup, json_path)
        except FileNotFoundError as e:
            logger.error("Error creating backup: %s", e)
            raise BackupError("No data file exists to backup") from e
        except OSError as e:
            logger.exception("Error creating backup")
            raise BackupError(f"Could not create backup: {e}") from e

        logger.info("Backup written to %s", backup_path)
        return backup_path

    def _copy_backup(self, json_path: Path) -> Path:
        if not json_path.exists():
            raise FileNotFoundError(f"Data file not found: {json_path}")
        backup_path = self.paths.timestamped_backup_path()
        backup_path.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(json_path, backup_path)
        return backup_path

    # ---- Import ----

    async def import_from_structured(self, text: str, merge: bool = False) -> int:
        """
        Import entries from a JSON array.

        Args:
            text: JSON text
            merge: Merge by term instead of replacing everything

        Returns:
            Number of entries decoded from the text
        """
        await self._ensure_loaded()
        return self._apply_import(structured_text_to_collection(text), merge, "JSON")

    async def import_from_table(self, text: str, merge: bool = False) -> int:
        """Import entries from CSV text (see import_from_structured)."""
        await self._ensure_loaded()
        return self._apply_import(table_to_collection(text), merge, "CSV")

    async def import_from_quick_text(self, text: str) -> int:
        """Import "term — meaning" lines; always merges by term."""
        await self._ensure_loaded()
        return self._apply_import(quick_text_to_collection(text), True, "quick text")

    def _apply_import(self, imported: list[WordEntry], merge: bool, source: str) -> int:
        if not imported:
            logger.info("Nothing to import from %s", source)
            return 0

        if merge:
            self._cache = merge_by_term(self._cache, imported)
        else:
            self._cache = list(imported)

        logger.info(
            "Imported %d entries from %s (%s), %d entries total",
            len(imported), source, "merge" if merge else "replace", len(self._cache),
        )
        self._changed()
        return len(imported)

    # ---- Export ----

    async def export_structured(self) -> str:
        """Current entries as JSON text."""
        await self._ensure_loaded()
        return collection_to_structured_text(list(self._cache))

    async def export_table(self) -> str:
        """Current entries as CSV text."""
        await self._ensure_loaded()
        return collection_to_table(list(self._cache))


def merge_by_term(
    existing: Iterable[WordEntry],
    imported: Iterable[WordEntry]
) -> list[WordEntry]:
    """
    Merge entries keyed by lower-cased term.

    Existing entries are added first, then imported ones overwrite them in
    order, so the last imported entry for a term wins (even with a
    different id).
    """
    entries_by_term: dict[str, WordEntry] = {}
    for entry in existing:
        entries_by_term[entry.term_key] = entry
    for entry in imported:
        entries_by_term[entry.term_key] = entry
    return list(entries_by_term.values())


def _read_text_if_exists(path: Path) -> Optional[str]:
    if not path.exists():
        return None
    return path.read_text(encoding="utf-8")
