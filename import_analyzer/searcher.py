"""
Dependency and dependant queries over a set of module files.

A DependencySearcher owns one existence cache and one extractor. Build a
new searcher per query run to start from a cold cache; reuse one to share
cached lookups between queries against the same unchanged tree.
"""

from __future__ import annotations

import glob
import logging
import os
from fnmatch import fnmatch
from typing import Iterable, List, Optional, Sequence, Set

from tqdm import tqdm

from .config import AnalyzerConfig
from .extractor import ImportExtractor
from .file_cache import ExistenceCache
from .resolver import PathResolver

logger = logging.getLogger(__name__)


def module_key(filename: str) -> str:
    """Normalize ``filename``; absolute paths under the working directory become relative.

    Resolved imports are keyed relative to the working directory, so module
    paths must use the same form for lookups to match.
    """
    path = os.path.normpath(filename)
    if os.path.isabs(path):
        relative = os.path.relpath(path)
        if relative != os.pardir and not relative.startswith(os.pardir + os.sep):
            return relative
    return path


class DependencySearcher:
    def __init__(
        self,
        config: Optional[AnalyzerConfig] = None,
        cache: Optional[ExistenceCache] = None,
        show_progress: bool = False,
    ):
        self.config = config or AnalyzerConfig()
        self.cache = cache if cache is not None else ExistenceCache()
        self.resolver = PathResolver(
            self.cache,
            resolve_dirs=self.config.resolve_dirs,
            resolve_extensions=self.config.resolve_extensions,
        )
        self.extractor = ImportExtractor(self.resolver, self.config.module_extensions)
        self.show_progress = show_progress

    def _progress(self, filenames: Sequence[str], desc: str) -> Iterable[str]:
        return tqdm(filenames, desc=desc, unit="file", disable=not self.show_progress, leave=False)

    def is_ignored(self, filename: str) -> bool:
        normalized = filename.replace(os.sep, "/")
        return any(fnmatch(normalized, pattern) for pattern in self.config.module_ignores)

    def find_modules(self, patterns: Optional[Sequence[str]] = None) -> List[str]:
        """Module files matching any of ``patterns``, first-seen order, no duplicates."""
        modules: List[str] = []
        found: Set[str] = set()
        for pattern in patterns or self.config.default_patterns:
            for filename in glob.glob(pattern, recursive=True):
                filename = module_key(filename)
                if filename in found:
                    continue
                if not os.path.isfile(filename) or self.is_ignored(filename):
                    continue
                if not self.extractor.is_module(filename):
                    continue
                found.add(filename)
                modules.append(filename)
        logger.debug("Found %d module file(s) for %s", len(modules), list(patterns or self.config.default_patterns))
        return modules

    def get_imports(self, filename: str, follow: bool = False) -> Set[str]:
        return self.extractor.extract(module_key(filename), follow)

    def get_all_imports(self, filenames: Sequence[str], follow: bool = False) -> Set[str]:
        import_paths: Set[str] = set()
        for filename in self._progress(filenames, "Scanning imports"):
            self.extractor.extract(filename, follow, import_paths)
        logger.debug("Resolved %d import(s); %d path(s) checked on disk", len(import_paths), len(self.cache))
        return import_paths

    def list_dependencies(self, patterns: Optional[Sequence[str]] = None, follow: bool = False) -> Set[str]:
        return self.get_all_imports(self.find_modules(patterns), follow)

    def list_dependants(self, filename: str, patterns: Optional[Sequence[str]] = None) -> List[str]:
        """Module files whose direct imports include ``filename``, sorted."""
        target = module_key(filename)
        dependants = []
        for module in self._progress(sorted(self.find_modules(patterns)), "Scanning dependants"):
            if target in self.extractor.direct_imports(module):
                dependants.append(module)
        return dependants
