"""
Import extraction for single module files, with optional transitive follow.

Follow mode uses an explicit worklist and a visited set, so import cycles
terminate and every file is expanded at most once per traversal:

    A -> B -> A     follow from A yields {B, A}
    A -> B, A -> C, B -> D, C -> D
                    follow from A yields {B, C, D}; D is parsed once
"""

import logging
import os
from collections import deque
from typing import Dict, FrozenSet, Optional, Sequence, Set

from .config import MODULE_EXTENSIONS
from .errors import ModuleParseError, SourceSyntaxError
from .resolver import PathResolver
from .ts_parser import scan_imports

logger = logging.getLogger(__name__)


class ImportExtractor:
    """Computes the resolved imports of module files.

    Direct import sets are memoized per file for the lifetime of the
    extractor, on the same assumption as the existence cache: the tree does
    not change during one query.
    """

    def __init__(self, resolver: PathResolver, module_extensions: Sequence[str] = MODULE_EXTENSIONS):
        self.resolver = resolver
        self.module_extensions = tuple(module_extensions)
        self._direct: Dict[str, FrozenSet[str]] = {}

    def is_module(self, filename: str) -> bool:
        return os.path.splitext(filename)[1] in self.module_extensions

    def direct_imports(self, filename: str) -> FrozenSet[str]:
        """Resolved paths imported by ``filename`` itself.

        Raises:
            ModuleParseError: if the file cannot be read or parsed.
        """
        if filename in self._direct:
            return self._direct[filename]
        if not self.is_module(filename):
            return frozenset()

        try:
            with open(filename, "rb") as f:
                source = f.read()
            occurrences = scan_imports(source, filename)
        except (OSError, SourceSyntaxError) as e:
            logger.error("Error while parsing: %s", filename)
            raise ModuleParseError(filename, str(e)) from e

        resolved: Set[str] = set()
        for occurrence in occurrences:
            if not occurrence.is_literal:
                logger.info(
                    "Skipping dynamic import of type %s in %s:%d",
                    occurrence.source_type,
                    filename,
                    occurrence.line,
                )
                continue
            path = self.resolver.resolve(filename, occurrence.specifier)
            if path is not None:
                resolved.add(path)

        imports = frozenset(resolved)
        self._direct[filename] = imports
        return imports

    def extract(self, filename: str, follow: bool = False, seen: Optional[Set[str]] = None) -> Set[str]:
        """Add the imports of ``filename`` to ``seen`` and return it.

        With ``follow`` the imports of every newly discovered file are added
        too, until no unexpanded file remains.
        """
        imports = seen if seen is not None else set()
        if not self.is_module(filename):
            return imports

        visited = {filename}
        frontier = deque([filename])
        while frontier:
            current = frontier.popleft()
            for path in self.direct_imports(current):
                imports.add(path)
                if follow and path not in visited:
                    visited.add(path)
                    frontier.append(path)

        if follow:
            logger.debug("Expanded %d file(s) starting from %s", len(visited), filename)
        return imports
