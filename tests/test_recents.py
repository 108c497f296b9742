"""Tests for the recents registry."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from jetjot.models import Manuscript
from jetjot.storage.recents import RecentEntry, RecentsRegistry, normalize_path
from jetjot.storage.store import ManuscriptStore


@pytest.fixture
def recents_file(tmp_path: Path) -> Path:
    return tmp_path / "app" / "recents.json"


@pytest.fixture
def registry(recents_file: Path) -> RecentsRegistry:
    return RecentsRegistry(recents_file)


def folders(registry: RecentsRegistry) -> list[str]:
    return [Path(e.folder_path).name for e in registry.entries]


class TestLoad:
    def test_missing_file_is_empty(self, registry: RecentsRegistry):
        assert registry.entries == []

    def test_garbage_file_is_empty(self, recents_file: Path):
        recents_file.parent.mkdir(parents=True)
        recents_file.write_text("{{{ not json", encoding="utf-8")
        assert RecentsRegistry(recents_file).entries == []

    def test_wrong_shape_is_empty(self, recents_file: Path):
        recents_file.parent.mkdir(parents=True)
        recents_file.write_text('{"recents": 7}', encoding="utf-8")
        assert RecentsRegistry(recents_file).entries == []

    def test_bad_entries_skipped(self, recents_file: Path, tmp_path: Path):
        recents_file.parent.mkdir(parents=True)
        recents_file.write_text(
            json.dumps(
                {
                    "recents": [
                        "nope",
                        {"name": "no path"},
                        {"name": "Good", "folderPath": str(tmp_path / "Good"), "lastOpened": "garbage"},
                    ]
                }
            ),
            encoding="utf-8",
        )
        registry = RecentsRegistry(recents_file)
        assert [e.name for e in registry.entries] == ["Good"]

    def test_bare_array_and_pascal_case(self, recents_file: Path, tmp_path: Path):
        recents_file.parent.mkdir(parents=True)
        recents_file.write_text(
            json.dumps(
                [{"Name": "Old", "FolderPath": str(tmp_path / "Old"), "LastOpened": "2025-01-02T03:04:05"}]
            ),
            encoding="utf-8",
        )
        (entry,) = RecentsRegistry(recents_file).entries
        assert entry.name == "Old"
        assert entry.last_opened.year == 2025


class TestAddOrBump:
    def test_persists(self, registry: RecentsRegistry, recents_file: Path, tmp_path: Path):
        registry.add_or_bump(tmp_path / "Book", "Book")
        data = json.loads(recents_file.read_text(encoding="utf-8"))
        (entry,) = data["recents"]
        assert entry["name"] == "Book"
        assert entry["folderPath"] == normalize_path(tmp_path / "Book")
        assert "lastOpened" in entry
        assert RecentsRegistry(recents_file).entries[0].name == "Book"

    def test_cap_at_five_most_recent_first(self, registry: RecentsRegistry, tmp_path: Path):
        for i in range(6):
            registry.add_or_bump(tmp_path / f"p{i}", f"P{i}")
        assert folders(registry) == ["p5", "p4", "p3", "p2", "p1"]

    def test_bump_is_case_insensitive(self, registry: RecentsRegistry, tmp_path: Path):
        registry.add_or_bump(tmp_path / "Book", "Book")
        registry.add_or_bump(tmp_path / "Other", "Other")
        registry.add_or_bump(tmp_path / "BOOK", "Book again")
        assert len(registry) == 2
        assert registry.entries[0].name == "Book again"
        assert folders(registry) == ["BOOK", "Other"]

    def test_relative_paths_normalized(self, registry: RecentsRegistry, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        registry.add_or_bump("Book", "Book")
        registry.add_or_bump(tmp_path / "sub" / ".." / "Book", "Book")
        assert len(registry) == 1
        assert registry.entries[0].folder_path == normalize_path(tmp_path / "Book")

    def test_custom_cap(self, recents_file: Path, tmp_path: Path):
        registry = RecentsRegistry(recents_file, max_entries=2)
        for i in range(4):
            registry.add_or_bump(tmp_path / f"p{i}", f"P{i}")
        assert folders(registry) == ["p3", "p2"]


class TestRemove:
    def test_remove(self, registry: RecentsRegistry, tmp_path: Path, recents_file: Path):
        registry.add_or_bump(tmp_path / "Book", "Book")
        registry.add_or_bump(tmp_path / "Other", "Other")
        assert registry.remove(tmp_path / "book") is True
        assert folders(registry) == ["Other"]
        assert folders(RecentsRegistry(recents_file)) == ["Other"]

    def test_remove_missing(self, registry: RecentsRegistry, tmp_path: Path):
        assert registry.remove(tmp_path / "ghost") is False

    def test_clear(self, registry: RecentsRegistry, tmp_path: Path, recents_file: Path):
        registry.add_or_bump(tmp_path / "Book", "Book")
        registry.clear()
        assert RecentsRegistry(recents_file).entries == []


class TestSaveDedup:
    def test_direct_mutation_deduplicated(self, registry: RecentsRegistry, tmp_path: Path):
        newest = str(tmp_path / "Book")
        registry.entries = [
            RecentEntry("newest", newest),
            RecentEntry("other", str(tmp_path / "Other")),
            RecentEntry("older dup", newest.upper()),
        ]
        registry.save()
        assert [e.name for e in registry.entries] == ["newest", "other"]

    def test_direct_mutation_capped(self, registry: RecentsRegistry, tmp_path: Path):
        registry.entries = [RecentEntry(f"P{i}", str(tmp_path / f"p{i}")) for i in range(8)]
        registry.save()
        assert len(registry) == 5


class TestSelfHealing:
    def test_open_existing(self, registry: RecentsRegistry, tmp_path: Path):
        store = ManuscriptStore()
        m = Manuscript(name="Real", folder_path=tmp_path / "Real")
        m.new_document()
        store.save(m)

        loaded = registry.open(tmp_path / "Real", store)
        assert loaded is not None and loaded.name == "Real"
        assert registry.entries[0].name == "Real"

    def test_open_stale_removes_entry(self, registry: RecentsRegistry, tmp_path: Path):
        registry.add_or_bump(tmp_path / "Gone", "Gone")
        assert registry.open(tmp_path / "Gone", ManuscriptStore()) is None
        assert registry.entries == []

    def test_open_plain_file_removes_entry(self, registry: RecentsRegistry, tmp_path: Path):
        (tmp_path / "Book").write_text("not a folder", encoding="utf-8")
        registry.add_or_bump(tmp_path / "Book", "Book")
        assert registry.open(tmp_path / "Book", ManuscriptStore()) is None
        assert registry.entries == []

    def test_prune_missing(self, registry: RecentsRegistry, tmp_path: Path):
        store = ManuscriptStore()
        store.create(tmp_path / "Kept", "Kept")
        registry.add_or_bump(tmp_path / "Kept", "Kept")
        registry.add_or_bump(tmp_path / "Gone", "Gone")
        assert registry.prune_missing(store) == 1
        assert folders(registry) == ["Kept"]
