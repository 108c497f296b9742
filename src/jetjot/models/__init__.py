"""In-memory model: Manuscript and Document."""

from jetjot.models.document import DEFAULT_TITLE, DEFAULT_WORD_GOAL, Document, parse_document_id
from jetjot.models.manuscript import DEFAULT_MANUSCRIPT_NAME, Manuscript

__all__ = [
    "DEFAULT_MANUSCRIPT_NAME",
    "DEFAULT_TITLE",
    "DEFAULT_WORD_GOAL",
    "Document",
    "Manuscript",
    "parse_document_id",
]
