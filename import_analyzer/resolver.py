"""
Maps raw import specifiers to files on disk.

Relative specifiers (starting with ".") are searched next to the importing
file. Anything else is a rooted import and is searched under each configured
resolve directory in turn. Within a search root the candidates are, in order:

    root/specifier                   exact name (also non-code assets)
    root/specifier.<ext>             for each resolve extension
    root/specifier/index.<ext>       for each resolve extension

The first candidate that exists wins. Bare package names that match nothing
under the resolve directories come back as None.
"""

import os
from typing import Iterator, Optional, Sequence

from .config import RESOLVE_DIRS, RESOLVE_EXTENSIONS
from .file_cache import ExistenceCache


class PathResolver:
    def __init__(
        self,
        cache: Optional[ExistenceCache] = None,
        resolve_dirs: Sequence[str] = RESOLVE_DIRS,
        resolve_extensions: Sequence[str] = RESOLVE_EXTENSIONS,
    ):
        self.cache = cache if cache is not None else ExistenceCache()
        self.resolve_dirs = tuple(resolve_dirs)
        self.resolve_extensions = tuple(resolve_extensions)

    def search_roots(self, importing_file: str, specifier: str) -> Sequence[str]:
        if specifier.startswith("."):
            return (os.path.dirname(importing_file),)
        return self.resolve_dirs

    def candidates(self, directory: str, specifier: str) -> Iterator[str]:
        """Yield candidate paths for one search root in priority order."""
        # eg. directory/filename
        yield os.path.normpath(os.path.join(directory, specifier))
        # eg. directory/filename.ext
        for ext in self.resolve_extensions:
            yield os.path.normpath(os.path.join(directory, f"{specifier}.{ext}"))
        # eg. directory/filename/index.ext
        for ext in self.resolve_extensions:
            yield os.path.normpath(os.path.join(directory, specifier, f"index.{ext}"))

    def resolve_in(self, directory: str, specifier: str) -> Optional[str]:
        for candidate in self.candidates(directory, specifier):
            if self.cache.exists(candidate):
                return candidate
        return None

    def resolve(self, importing_file: str, specifier: str) -> Optional[str]:
        for root in self.search_roots(importing_file, specifier):
            resolved = self.resolve_in(root, specifier)
            if resolved is not None:
                return resolved
        return None
