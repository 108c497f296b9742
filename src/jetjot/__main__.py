"""Entry point: python -m jetjot <command>

- new <folder> [name]          Create a manuscript folder with one starter document
- show <folder>                List a manuscript's documents in order
- import <file> [parent]       Import a .jetplot outline under parent (default: projects_dir)
- recents                      List recently opened manuscripts (prunes vanished ones)
- forget <folder>              Remove a folder from recents
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from jetjot.config import JetJotConfig, load_config
from jetjot.errors import JetJotError
from jetjot.importers.jetplot import import_into
from jetjot.storage.recents import RecentsRegistry
from jetjot.storage.store import ManuscriptStore

logger = logging.getLogger(__name__)

_USAGE = """\
Usage: python -m jetjot <command> [args]
  new <folder> [name]     Create a new manuscript
  show <folder>           Show a manuscript's documents
  import <file> [parent]  Import a .jetplot outline
  recents                 List recently opened manuscripts
  forget <folder>         Remove a folder from recents"""


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _registry(config: JetJotConfig) -> RecentsRegistry:
    return RecentsRegistry(config.recents_file, max_entries=config.max_recents)


def _cmd_new(config: JetJotConfig, args: list[str]) -> int:
    folder = Path(args[0])
    name = args[1] if len(args) > 1 else folder.name
    manuscript = ManuscriptStore().create(folder, name)
    _registry(config).add_or_bump(folder, manuscript.name)
    print(f"Created '{manuscript.name}' at {manuscript.folder_path}")
    return 0


def _cmd_show(config: JetJotConfig, args: list[str]) -> int:
    folder = Path(args[0])
    manuscript = ManuscriptStore().load(folder)
    _registry(config).add_or_bump(folder, manuscript.name)

    current = manuscript.last_open_document
    print(f"{manuscript.name} ({manuscript.total_word_count} words)")
    for i, doc in enumerate(manuscript.documents, 1):
        marker = "*" if doc is current else " "
        lock = " [locked]" if doc.is_locked else ""
        print(f"{marker} {i:>3}. {doc.title}  {doc.word_count}/{doc.word_goal}{lock}")
    return 0


def _cmd_import(config: JetJotConfig, args: list[str]) -> int:
    parent = Path(args[1]) if len(args) > 1 else config.projects_dir
    manuscript = import_into(args[0], parent)
    _registry(config).add_or_bump(manuscript.folder_path, manuscript.name)
    print(
        f"Imported '{manuscript.name}' ({len(manuscript.documents)} documents) "
        f"to {manuscript.folder_path}"
    )
    return 0


def _cmd_recents(config: JetJotConfig, args: list[str]) -> int:
    registry = _registry(config)
    registry.prune_missing(ManuscriptStore())
    if not registry.entries:
        print("(no recent manuscripts)")
    for entry in registry:
        print(f"{entry.last_opened:%Y-%m-%d %H:%M}  {entry.name}  {entry.folder_path}")
    return 0


def _cmd_forget(config: JetJotConfig, args: list[str]) -> int:
    if _registry(config).remove(args[0]):
        print(f"Removed {args[0]} from recents")
    else:
        print(f"{args[0]} was not in recents")
    return 0


# command -> (handler, minimum positional args)
_COMMANDS = {
    "new": (_cmd_new, 1),
    "show": (_cmd_show, 1),
    "import": (_cmd_import, 1),
    "recents": (_cmd_recents, 0),
    "forget": (_cmd_forget, 1),
}


def run(argv: list[str], config: JetJotConfig | None = None) -> int:
    """Dispatch a command line; returns the process exit status."""
    if not argv or argv[0] not in _COMMANDS:
        print(_USAGE)
        return 1
    handler, min_args = _COMMANDS[argv[0]]
    args = argv[1:]
    if len(args) < min_args:
        print(_USAGE)
        return 1

    config = config or load_config()
    try:
        return handler(config, args)
    except JetJotError as e:
        logger.debug("Command %s failed", argv[0], exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


def main() -> None:
    config = load_config()
    _setup_logging(config.log_level)
    sys.exit(run(sys.argv[1:], config))


if __name__ == "__main__":
    main()
