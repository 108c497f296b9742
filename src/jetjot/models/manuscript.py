"""Manuscript: a named, ordered collection of documents backed by one folder.

Order in `documents` is user-controlled. Insert and move operations never
re-sort it. Document ids are unique within a manuscript.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from pathlib import Path

from jetjot.errors import DocumentLockedError, DocumentNotFoundError, DuplicateDocumentError
from jetjot.models.document import DEFAULT_TITLE, Document

logger = logging.getLogger(__name__)

DEFAULT_MANUSCRIPT_NAME = "Untitled Manuscript"


@dataclass(eq=False)
class Manuscript:
    """In-memory manuscript. `folder_path` stays None until a folder is chosen."""

    name: str = DEFAULT_MANUSCRIPT_NAME
    folder_path: Path | None = None
    last_open_document_id: uuid.UUID | None = None
    documents: list[Document] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.folder_path is not None and not isinstance(self.folder_path, Path):
            self.folder_path = Path(self.folder_path) if str(self.folder_path) else None
        seen: set[uuid.UUID] = set()
        for doc in self.documents:
            if doc.id in seen:
                raise DuplicateDocumentError(f"Duplicate document id {doc.id}")
            seen.add(doc.id)

    # ── Lookup ────────────────────────────────────────────────

    def find_document(self, document_id: uuid.UUID) -> Document | None:
        for doc in self.documents:
            if doc.id == document_id:
                return doc
        return None

    def get_document(self, document_id: uuid.UUID) -> Document:
        doc = self.find_document(document_id)
        if doc is None:
            raise DocumentNotFoundError(f"No document {document_id} in '{self.name}'")
        return doc

    def index_of(self, document_id: uuid.UUID) -> int:
        for i, doc in enumerate(self.documents):
            if doc.id == document_id:
                return i
        raise DocumentNotFoundError(f"No document {document_id} in '{self.name}'")

    # ── Mutation ──────────────────────────────────────────────

    def add_document(self, document: Document, index: int | None = None) -> Document:
        """Insert an existing document (append when index is None)."""
        if self.find_document(document.id) is not None:
            raise DuplicateDocumentError(f"Document {document.id} is already in '{self.name}'")
        if index is None:
            self.documents.append(document)
        else:
            self.documents.insert(index, document)
        return document

    def new_document(
        self, title: str = DEFAULT_TITLE, text: str = "", index: int | None = None
    ) -> Document:
        """Create a fresh document and insert it."""
        return self.add_document(Document(title=title, text=text), index)

    def move_document(self, document_id: uuid.UUID, new_index: int) -> None:
        """Move a document to new_index, clamped to the sequence bounds."""
        doc = self.documents.pop(self.index_of(document_id))
        new_index = max(0, min(new_index, len(self.documents)))
        self.documents.insert(new_index, doc)

    def remove_document(self, document_id: uuid.UUID) -> Document:
        """Remove and return a document. Locked documents cannot be removed."""
        doc = self.get_document(document_id)
        if doc.is_locked:
            raise DocumentLockedError(f"Document '{doc.title}' is locked")
        self.documents.remove(doc)
        if self.last_open_document_id == document_id:
            self.last_open_document_id = None
        logger.debug("Removed document %s from '%s'", document_id, self.name)
        return doc

    def mark_open(self, document_id: uuid.UUID) -> None:
        """Record the document to reselect on next load."""
        self.last_open_document_id = self.get_document(document_id).id

    # ── Derived ───────────────────────────────────────────────

    @property
    def last_open_document(self) -> Document | None:
        """The last-open document, falling back to the first one."""
        if self.last_open_document_id is not None:
            doc = self.find_document(self.last_open_document_id)
            if doc is not None:
                return doc
        return self.documents[0] if self.documents else None

    @property
    def total_word_count(self) -> int:
        return sum(doc.word_count for doc in self.documents)
