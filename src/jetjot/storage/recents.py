"""Recently opened manuscripts, most recent first.

The registry is a disposable convenience cache stored as its own JSON file
(never inside a manuscript folder):

    {"recents": [{"name": "My Book", "folderPath": "/home/me/My Book",
                  "lastOpened": "2026-10-19T08:38:00"}]}

Reads never raise: a missing or unparsable file yields an empty list.
Paths are compared case-insensitively after normalization.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

from jetjot.config import DEFAULT_MAX_RECENTS
from jetjot.errors import NotFoundError

if TYPE_CHECKING:
    from jetjot.models.manuscript import Manuscript
    from jetjot.storage.store import ManuscriptStore

logger = logging.getLogger(__name__)


def normalize_path(folder_path: str | Path) -> str:
    """Absolute, platform-canonical form of a folder path."""
    return os.path.normpath(os.path.abspath(os.path.expanduser(str(folder_path))))


def _path_key(folder_path: str | Path) -> str:
    return normalize_path(folder_path).lower()


@dataclass
class RecentEntry:
    name: str
    folder_path: str
    last_opened: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "folderPath": self.folder_path,
            "lastOpened": self.last_opened.isoformat(timespec="seconds"),
        }

    @classmethod
    def from_dict(cls, data: dict) -> RecentEntry:
        """Raises ValueError/TypeError/KeyError on unusable data."""
        folder = data.get("folderPath", data.get("FolderPath"))
        if not isinstance(folder, str) or not folder.strip():
            raise ValueError("entry has no folderPath")
        name = data.get("name", data.get("Name")) or Path(folder).name
        raw_time = data.get("lastOpened", data.get("LastOpened"))
        try:
            last_opened = datetime.fromisoformat(raw_time)
        except (TypeError, ValueError):
            # The timestamp is informational; ordering comes from list position.
            last_opened = datetime.now()
        return cls(name=str(name), folder_path=normalize_path(folder), last_opened=last_opened)


class RecentsRegistry:
    """Capped, deduplicated list of recently opened manuscript folders.

    `entries` is a plain list and may be mutated directly. `save()` always
    re-applies the dedup and cap rules before writing.
    """

    def __init__(self, path: Path, max_entries: int = DEFAULT_MAX_RECENTS) -> None:
        self.path = Path(path)
        self.max_entries = max_entries
        self.entries: list[RecentEntry] = self._read()

    # ── Persistence ───────────────────────────────────────────

    def _read(self) -> list[RecentEntry]:
        if not self.path.exists():
            return []
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable recents file %s: %s", self.path, e)
            return []

        raw_entries = data.get("recents", data.get("Recents")) if isinstance(data, dict) else data
        if not isinstance(raw_entries, list):
            logger.warning("Ignoring recents file %s: unexpected shape", self.path)
            return []

        entries: list[RecentEntry] = []
        for raw in raw_entries:
            if not isinstance(raw, dict):
                continue
            try:
                entries.append(RecentEntry.from_dict(raw))
            except (ValueError, TypeError) as e:
                logger.warning("Skipping bad recents entry %r: %s", raw, e)
        return entries

    def _dedup(self) -> None:
        seen: set[str] = set()
        unique: list[RecentEntry] = []
        for entry in self.entries:
            key = _path_key(entry.folder_path)
            if key in seen:
                continue
            seen.add(key)
            unique.append(entry)
        self.entries = unique[: self.max_entries]

    def save(self) -> None:
        self._dedup()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {"recents": [entry.to_dict() for entry in self.entries]}
        self.path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
        logger.debug("Wrote %d recent(s) to %s", len(self.entries), self.path)

    # ── Operations ────────────────────────────────────────────

    def add_or_bump(self, folder_path: str | Path, name: str) -> RecentEntry:
        """Put folder_path at the front, replacing any existing entry for it."""
        normalized = normalize_path(folder_path)
        key = normalized.lower()
        self.entries = [e for e in self.entries if _path_key(e.folder_path) != key]
        entry = RecentEntry(name=name, folder_path=normalized)
        self.entries.insert(0, entry)
        self.save()
        return entry

    def remove(self, folder_path: str | Path) -> bool:
        """Delete every entry matching folder_path. Returns True if any matched."""
        key = _path_key(folder_path)
        before = len(self.entries)
        self.entries = [e for e in self.entries if _path_key(e.folder_path) != key]
        self.save()
        return len(self.entries) != before

    def clear(self) -> None:
        self.entries = []
        self.save()

    def open(self, folder_path: str | Path, store: ManuscriptStore) -> Manuscript | None:
        """Load a recent manuscript; a vanished folder drops its entry instead of raising."""
        try:
            manuscript = store.load(folder_path)
        except NotFoundError as e:
            logger.warning("Removing stale recent %s: %s", folder_path, e)
            self.remove(folder_path)
            return None
        self.add_or_bump(folder_path, manuscript.name)
        return manuscript

    def prune_missing(self, store: ManuscriptStore) -> int:
        """Drop entries whose folder no longer holds a manifest. Returns count removed."""
        kept = [e for e in self.entries if store.is_manuscript_folder(e.folder_path)]
        removed = len(self.entries) - len(kept)
        self.entries = kept
        if removed:
            logger.info("Pruned %d missing recent(s)", removed)
        self.save()
        return removed

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)
