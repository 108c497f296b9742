"""Exception hierarchy for the JetJot core.

    JetJotError
    +-- ConfigurationError        required input (e.g. folder path) unset
    +-- NotFoundError             expected file absent (also FileNotFoundError)
    |   +-- ManifestNotFoundError
    |   +-- ContentNotFoundError
    +-- MalformedDataError        file exists but fails to parse (also ValueError)
    +-- InvalidIdentifierError    id is not a UUID token (also ValueError)
    +-- DuplicateDocumentError
    +-- DocumentNotFoundError     (also KeyError)
    +-- DocumentLockedError

The store and importer raise these; they never log-and-continue.
"""

from __future__ import annotations

from pathlib import Path


class JetJotError(Exception):
    """Base class for every error raised by the JetJot core."""

    def __init__(
        self,
        message: str,
        path: str | Path | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.path = Path(path) if path is not None else None
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        if self.path is not None:
            return f"{self.message} [{self.path}]"
        return self.message


class ConfigurationError(JetJotError):
    """A required setting or input was not provided before the operation."""


class NotFoundError(JetJotError, FileNotFoundError):
    """An expected file does not exist."""


class ManifestNotFoundError(NotFoundError):
    """The folder holds no manuscript.json."""


class ContentNotFoundError(NotFoundError):
    """The manifest references a document whose content file is missing."""


class MalformedDataError(JetJotError, ValueError):
    """A file exists but does not match the expected schema."""


class InvalidIdentifierError(JetJotError, ValueError):
    """A document identifier is not a well-formed UUID."""


class DuplicateDocumentError(JetJotError):
    """A document id is already present in the manuscript."""


class DocumentNotFoundError(JetJotError, KeyError):
    """No document with the given id belongs to the manuscript."""


class DocumentLockedError(JetJotError):
    """The document is locked and cannot be removed."""
