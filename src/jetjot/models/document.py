"""Document: one writable text unit of a manuscript."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field

from jetjot.errors import InvalidIdentifierError

DEFAULT_TITLE = "Untitled"
DEFAULT_WORD_GOAL = 1000


def parse_document_id(value: object) -> uuid.UUID:
    """Parse a UUID token (or pass a UUID through). Raises InvalidIdentifierError."""
    if isinstance(value, uuid.UUID):
        return value
    if not isinstance(value, str):
        raise InvalidIdentifierError(f"Document id must be a UUID string, got {value!r}")
    try:
        return uuid.UUID(value.strip())
    except ValueError as exc:
        raise InvalidIdentifierError(f"Invalid document id: {value!r}") from exc


@dataclass(eq=False)
class Document:
    """A single document. Identity is `id`, assigned once and never changed."""

    title: str = DEFAULT_TITLE
    text: str = ""
    word_goal: int = DEFAULT_WORD_GOAL
    is_locked: bool = False
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    def __post_init__(self) -> None:
        self.id = parse_document_id(self.id)
        if isinstance(self.word_goal, bool) or not isinstance(self.word_goal, int) or self.word_goal <= 0:
            raise ValueError(f"word_goal must be a positive integer, got {self.word_goal!r}")

    @property
    def file_name(self) -> str:
        """Content filename inside the manuscript folder."""
        return f"{self.id}.txt"

    @property
    def word_count(self) -> int:
        return len(self.text.split())

    @property
    def goal_progress(self) -> float:
        return self.word_count / self.word_goal
