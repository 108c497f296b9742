"""Manuscript store: read/write a manuscript folder.

Layout:
    <folder>/
    ├── manuscript.json     # manifest (see storage.manifest)
    └── <document-id>.txt   # raw UTF-8 body per document

Every save rewrites the manifest and every content file. There is no diffing,
no temp-file swap and no locking: concurrent writers to one folder are not
coordinated and the last writer wins. Every load re-reads from disk.
"""

from __future__ import annotations

import logging
from pathlib import Path

from jetjot.errors import (
    ConfigurationError,
    ContentNotFoundError,
    MalformedDataError,
    ManifestNotFoundError,
)
from jetjot.models.document import Document
from jetjot.models.manuscript import Manuscript
from jetjot.storage.manifest import (
    MANIFEST_FILENAME,
    build_manifest,
    decode_manifest,
    encode_manifest,
)

logger = logging.getLogger(__name__)


def _write_text(path: Path, text: str) -> None:
    # newline="" keeps the body byte-exact (no \n -> os.linesep translation).
    with path.open("w", encoding="utf-8", newline="") as f:
        f.write(text)


# A path that is a file where a folder is expected (or vice versa) counts as missing.
_MISSING = (FileNotFoundError, NotADirectoryError, IsADirectoryError)


def _read_text(path: Path) -> str:
    return path.read_bytes().decode("utf-8")


class ManuscriptStore:
    """Saves and loads manuscripts using the manifest + content-file layout."""

    # ── Save ──────────────────────────────────────────────────

    def save(self, manuscript: Manuscript) -> Path:
        """Write the whole manuscript to its folder. Returns the folder path."""
        if manuscript.folder_path is None or not str(manuscript.folder_path).strip():
            raise ConfigurationError(
                f"Manuscript '{manuscript.name}' has no folder path; choose a folder before saving"
            )
        folder = Path(manuscript.folder_path)
        logger.info("Saving manuscript '%s' to %s", manuscript.name, folder)

        folder.mkdir(parents=True, exist_ok=True)
        manifest = build_manifest(manuscript)

        for doc in manuscript.documents:
            _write_text(folder / doc.file_name, doc.text)
            logger.debug("Wrote %s (%d chars)", doc.file_name, len(doc.text))

        _write_text(folder / MANIFEST_FILENAME, encode_manifest(manifest))
        logger.info("Saved %d document(s) to %s", len(manuscript.documents), folder)
        return folder

    # ── Load ──────────────────────────────────────────────────

    def load(self, folder_path: str | Path) -> Manuscript:
        """Read a manuscript folder. Raises NotFoundError / MalformedDataError."""
        folder = Path(folder_path)
        manifest_path = folder / MANIFEST_FILENAME
        logger.info("Loading manuscript from %s", folder)

        try:
            raw = _read_text(manifest_path)
        except _MISSING as exc:
            raise ManifestNotFoundError("No manuscript.json found", path=manifest_path) from exc
        except UnicodeDecodeError as exc:
            raise MalformedDataError("Manifest is not valid UTF-8", path=manifest_path) from exc

        try:
            manifest = decode_manifest(raw)
        except MalformedDataError as exc:
            raise MalformedDataError(exc.message, path=manifest_path) from exc

        manuscript = Manuscript(
            name=manifest.name,
            folder_path=folder,
            last_open_document_id=manifest.last_open_document_id,
        )
        for entry in manifest.ordered_documents():
            doc = Document(
                id=entry.id,
                title=entry.title,
                word_goal=entry.word_goal,
                is_locked=entry.is_locked,
            )
            content_path = folder / doc.file_name
            try:
                doc.text = _read_text(content_path)
            except _MISSING as exc:
                raise ContentNotFoundError(
                    f"Manifest references missing document '{entry.title}'", path=content_path
                ) from exc
            except UnicodeDecodeError as exc:
                raise MalformedDataError(
                    f"Document '{entry.title}' is not valid UTF-8", path=content_path
                ) from exc
            manuscript.documents.append(doc)

        logger.info(
            "Loaded manuscript '%s' (%d document(s))", manuscript.name, len(manuscript.documents)
        )
        return manuscript

    # ── Helpers ───────────────────────────────────────────────

    @staticmethod
    def is_manuscript_folder(folder_path: str | Path) -> bool:
        return (Path(folder_path) / MANIFEST_FILENAME).is_file()

    def create(self, folder_path: str | Path, name: str) -> Manuscript:
        """New-project flow: one empty starter document, saved immediately."""
        manuscript = Manuscript(name=name, folder_path=Path(folder_path))
        starter = manuscript.new_document()
        manuscript.last_open_document_id = starter.id
        self.save(manuscript)
        return manuscript
