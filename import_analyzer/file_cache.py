"""Memoized file existence checks."""

import logging
import os
import stat
from typing import Dict

logger = logging.getLogger(__name__)


class ExistenceCache:
    """Remembers whether a path names a regular file.

    Each distinct path is stat'ed once for the lifetime of the cache. The
    source tree is assumed not to change while a query runs, so entries are
    never invalidated unless ``clear()`` is called.
    """

    def __init__(self):
        self._entries: Dict[str, bool] = {}

    def exists(self, path: str) -> bool:
        if path in self._entries:
            return self._entries[path]
        try:
            is_file = stat.S_ISREG(os.stat(path).st_mode)
        except (OSError, ValueError):
            # Missing paths, permission errors and unencodable names all count as absent.
            is_file = False
        self._entries[path] = is_file
        return is_file

    def clear(self) -> None:
        logger.debug("Dropping %d cached existence entries", len(self._entries))
        self._entries.clear()

    def __contains__(self, path: str) -> bool:
        return path in self._entries

    def __len__(self) -> int:
        return len(self._entries)
