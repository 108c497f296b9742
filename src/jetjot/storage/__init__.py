"""On-disk persistence: manifest codec, manuscript store and recents registry."""

from jetjot.storage.manifest import MANIFEST_FILENAME
from jetjot.storage.recents import RecentEntry, RecentsRegistry
from jetjot.storage.store import ManuscriptStore

__all__ = ["MANIFEST_FILENAME", "ManuscriptStore", "RecentEntry", "RecentsRegistry"]
