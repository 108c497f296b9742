"""Import JetPlot (.jetplot) canvas outlines as JetJot manuscripts.

A .jetplot file is a JSON object:

    {"name": "My Plot", "nodes": [{"id": "<uuid>", "title": "...",
                                   "description": "...", "x": 120.0, ...}]}

Only name/nodes and the node fields id/title/description/x are read; any other
field (connections, y, shape, ...) is ignored. Property names match
case-insensitively. Nodes become documents ordered left-to-right by x, the
closest approximation of narrative order on a free-form canvas.
"""

from __future__ import annotations

import json
import logging
import math
import re
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jetjot.errors import InvalidIdentifierError, MalformedDataError, NotFoundError
from jetjot.models.document import DEFAULT_TITLE, DEFAULT_WORD_GOAL, Document, parse_document_id
from jetjot.models.manuscript import Manuscript
from jetjot.storage.store import ManuscriptStore

logger = logging.getLogger(__name__)

IMPORTED_PROJECT_NAME = "Imported Project"

# Characters illegal in a folder name on any common filesystem (Windows is the strictest).
_ILLEGAL_FOLDER_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')


@dataclass
class _PlotNode:
    id: object
    title: str
    description: str
    x: float


def _lookup(data: dict, key: str) -> Any:
    lowered = key.lower()
    for k, v in data.items():
        if isinstance(k, str) and k.lower() == lowered:
            return v
    return None


def _optional_str(value: Any, what: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise MalformedDataError(f"{what} must be a string, got {value!r}")
    return value


def _reject_constant(token: str) -> Any:
    raise ValueError(f"non-standard JSON token {token}")


def _read_json(source: Path) -> Any:
    try:
        text = source.read_text(encoding="utf-8")
    except (FileNotFoundError, NotADirectoryError, IsADirectoryError) as exc:
        raise NotFoundError("No .jetplot file found", path=source) from exc
    except UnicodeDecodeError as exc:
        raise MalformedDataError(f"Not a valid .jetplot file: {exc}", path=source) from exc
    try:
        # NaN/Infinity are not JSON; json.loads would otherwise accept them.
        return json.loads(text, parse_constant=_reject_constant)
    except ValueError as exc:
        raise MalformedDataError(f"Not a valid .jetplot file: {exc}", path=source) from exc


def _parse_plot(data: Any, source: Path) -> tuple[str, list[_PlotNode]]:
    if not isinstance(data, dict):
        raise MalformedDataError("A .jetplot file must contain a JSON object", path=source)

    name = _optional_str(_lookup(data, "name"), "name")

    raw_nodes = _lookup(data, "nodes")
    if raw_nodes is None:
        raw_nodes = []
    if not isinstance(raw_nodes, list):
        raise MalformedDataError("'nodes' must be an array", path=source)

    nodes: list[_PlotNode] = []
    for i, raw in enumerate(raw_nodes):
        if not isinstance(raw, dict):
            raise MalformedDataError(f"nodes[{i}] is not an object", path=source)
        x = _lookup(raw, "x")
        if x is None:
            x = 0.0
        if isinstance(x, bool) or not isinstance(x, (int, float)):
            raise MalformedDataError(f"nodes[{i}].x must be a number, got {x!r}", path=source)
        try:
            x = float(x)
        except OverflowError:
            x = math.inf
        if not math.isfinite(x):
            raise MalformedDataError(f"nodes[{i}].x must be finite, got {x!r}", path=source)
        raw_id = _lookup(raw, "id")
        nodes.append(
            _PlotNode(
                id=raw_id,
                title=_optional_str(_lookup(raw, "title"), f"nodes[{i}].title"),
                description=_optional_str(_lookup(raw, "description"), f"nodes[{i}].description"),
                x=x,
            )
        )
    return name, nodes


def read_project_name(source_file_path: str | Path) -> str:
    """Read only the project name from a .jetplot file."""
    source = Path(source_file_path)
    data = _read_json(source)
    if isinstance(data, dict):
        name = _lookup(data, "name")
        if isinstance(name, str) and name.strip():
            return name
    return IMPORTED_PROJECT_NAME


def import_jetplot(
    source_file_path: str | Path,
    output_folder_path: str | Path,
    store: ManuscriptStore | None = None,
) -> Manuscript:
    """Convert a .jetplot file into a manuscript folder at output_folder_path."""
    source = Path(source_file_path)
    logger.info("Importing %s into %s", source, output_folder_path)
    name, nodes = _parse_plot(_read_json(source), source)

    # sorted() is stable: equal x keeps file order.
    ordered = sorted(nodes, key=lambda node: node.x)

    manuscript = Manuscript(
        name=name if name.strip() else IMPORTED_PROJECT_NAME,
        folder_path=Path(output_folder_path),
    )
    seen: set[uuid.UUID] = set()
    for node in ordered:
        doc_id = parse_document_id(node.id)
        if doc_id in seen:
            raise InvalidIdentifierError(f"Duplicate node id {node.id!r}", path=source)
        seen.add(doc_id)
        manuscript.documents.append(
            Document(
                id=doc_id,
                title=node.title if node.title.strip() else DEFAULT_TITLE,
                text=node.description,
                word_goal=DEFAULT_WORD_GOAL,
                is_locked=False,
            )
        )

    (store or ManuscriptStore()).save(manuscript)
    logger.info("Imported %d node(s) as '%s'", len(manuscript.documents), manuscript.name)
    return manuscript


def import_into(
    source_file_path: str | Path,
    parent_folder: str | Path,
    store: ManuscriptStore | None = None,
) -> Manuscript:
    """Import into a new, uniquely named folder under parent_folder."""
    folder_name = sanitize_folder_name(read_project_name(source_file_path))
    destination = unique_folder_path(Path(parent_folder) / folder_name)
    return import_jetplot(source_file_path, destination, store)


def unique_folder_path(base: str | Path) -> Path:
    """Return base if unused, otherwise "base (2)", "base (3)", ...

    Only checks the filesystem; never creates anything. A base without a final
    component ("." or "..") is resolved first; a filesystem root is rejected.
    """
    base = Path(base)
    if base.name in ("", ".."):
        base = base.resolve()
    if not base.name:
        raise ValueError(f"{base} does not name a folder")
    if not base.exists():
        return base
    suffix = 2
    while True:
        candidate = base.with_name(f"{base.name} ({suffix})")
        if not candidate.exists():
            return candidate
        suffix += 1


def sanitize_folder_name(name: str) -> str:
    """Replace characters illegal in folder names with '_' and trim."""
    sanitized = _ILLEGAL_FOLDER_CHARS.sub("_", name).strip()
    return sanitized or IMPORTED_PROJECT_NAME
