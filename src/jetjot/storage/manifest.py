"""Manifest codec: Manuscript <-> manuscript.json projection.

The manifest carries every document field except the body text, plus an
explicit `order` written as each document's position at save time:

    {
      "name": "My Book",
      "lastOpenDocumentId": "2f1c...",
      "documents": [
        {"id": "2f1c...", "title": "Chapter 1", "wordGoal": 1000, "isLocked": false, "order": 0}
      ]
    }

Reading is strict about types but lenient about key case and unknown keys.
"""

from __future__ import annotations

import json
import uuid
from dataclasses import dataclass, field
from typing import Any

from jetjot.errors import InvalidIdentifierError, MalformedDataError
from jetjot.models.document import DEFAULT_TITLE, DEFAULT_WORD_GOAL, parse_document_id
from jetjot.models.manuscript import DEFAULT_MANUSCRIPT_NAME, Manuscript

MANIFEST_FILENAME = "manuscript.json"


def _lookup(data: dict, key: str, default: Any = None) -> Any:
    """Case-insensitive key lookup (exact match wins)."""
    if key in data:
        return data[key]
    lowered = key.lower()
    for k, v in data.items():
        if isinstance(k, str) and k.lower() == lowered:
            return v
    return default


def _parse_id(value: object, what: str) -> uuid.UUID:
    try:
        return parse_document_id(value)
    except InvalidIdentifierError as exc:
        raise MalformedDataError(f"{what} is not a valid UUID: {value!r}") from exc


def _expect(value: Any, kind: type | tuple[type, ...], what: str) -> Any:
    # bool is an int subclass; never accept it where a number is expected.
    if isinstance(value, bool) and kind is int:
        raise MalformedDataError(f"{what} must be an integer, got {value!r}")
    if not isinstance(value, kind):
        raise MalformedDataError(f"{what} has the wrong type: {value!r}")
    return value


@dataclass
class DocumentManifest:
    """Manifest entry for one document."""

    id: uuid.UUID
    title: str = DEFAULT_TITLE
    word_goal: int = DEFAULT_WORD_GOAL
    is_locked: bool = False
    order: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "title": self.title,
            "wordGoal": self.word_goal,
            "isLocked": self.is_locked,
            "order": self.order,
        }

    @classmethod
    def from_dict(cls, data: Any, position: int = 0) -> DocumentManifest:
        if not isinstance(data, dict):
            raise MalformedDataError(f"Document entry {position} is not an object")
        where = f"documents[{position}]"
        raw_id = _lookup(data, "id")
        if raw_id is None:
            raise MalformedDataError(f"{where} has no id")
        title = _lookup(data, "title", DEFAULT_TITLE)
        title = DEFAULT_TITLE if title is None else _expect(title, str, f"{where}.title")
        word_goal = _expect(_lookup(data, "wordGoal", DEFAULT_WORD_GOAL), int, f"{where}.wordGoal")
        if word_goal <= 0:
            raise MalformedDataError(f"{where}.wordGoal must be positive, got {word_goal}")
        return cls(
            id=_parse_id(raw_id, f"{where}.id"),
            title=title,
            word_goal=word_goal,
            is_locked=_expect(_lookup(data, "isLocked", False), bool, f"{where}.isLocked"),
            order=_expect(_lookup(data, "order", position), int, f"{where}.order"),
        )


@dataclass
class ManuscriptManifest:
    """The full manifest: manuscript metadata plus ordered document entries."""

    name: str = DEFAULT_MANUSCRIPT_NAME
    last_open_document_id: uuid.UUID | None = None
    documents: list[DocumentManifest] = field(default_factory=list)

    def ordered_documents(self) -> list[DocumentManifest]:
        """Entries sorted by `order`; ties keep input order."""
        return sorted(self.documents, key=lambda entry: entry.order)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "lastOpenDocumentId": (
                str(self.last_open_document_id) if self.last_open_document_id is not None else None
            ),
            "documents": [entry.to_dict() for entry in self.documents],
        }

    @classmethod
    def from_dict(cls, data: Any) -> ManuscriptManifest:
        if not isinstance(data, dict):
            raise MalformedDataError("Manifest root must be a JSON object")

        name = _lookup(data, "name", DEFAULT_MANUSCRIPT_NAME)
        name = DEFAULT_MANUSCRIPT_NAME if name is None else _expect(name, str, "name")

        raw_last = _lookup(data, "lastOpenDocumentId")
        last_open = None if raw_last is None else _parse_id(raw_last, "lastOpenDocumentId")

        raw_docs = _lookup(data, "documents", [])
        if raw_docs is None:
            raw_docs = []
        _expect(raw_docs, list, "documents")
        documents = [DocumentManifest.from_dict(item, i) for i, item in enumerate(raw_docs)]

        seen: set[uuid.UUID] = set()
        for entry in documents:
            if entry.id in seen:
                raise MalformedDataError(f"Duplicate document id in manifest: {entry.id}")
            seen.add(entry.id)

        return cls(name=name, last_open_document_id=last_open, documents=documents)


def build_manifest(manuscript: Manuscript) -> ManuscriptManifest:
    """Project a manuscript to its manifest; `order` is the current index."""
    return ManuscriptManifest(
        name=manuscript.name,
        last_open_document_id=manuscript.last_open_document_id,
        documents=[
            DocumentManifest(
                id=doc.id,
                title=doc.title,
                word_goal=doc.word_goal,
                is_locked=doc.is_locked,
                order=i,
            )
            for i, doc in enumerate(manuscript.documents)
        ],
    )


def encode_manifest(manifest: ManuscriptManifest) -> str:
    """Formatted, deterministic JSON text for manuscript.json."""
    return json.dumps(manifest.to_dict(), ensure_ascii=False, indent=2) + "\n"


def decode_manifest(text: str) -> ManuscriptManifest:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedDataError(f"Manifest is not valid JSON: {exc}") from exc
    return ManuscriptManifest.from_dict(data)
