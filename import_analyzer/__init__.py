"""
Import analyzer: resolves JavaScript/TypeScript import specifiers to files
and answers dependency and dependant queries over a source tree.
"""

from .config import AnalyzerConfig
from .errors import ConfigError, ImportAnalyzerError, ModuleParseError, SourceSyntaxError
from .extractor import ImportExtractor
from .file_cache import ExistenceCache
from .graph import build_import_graph, detect_cycles, invert_graph, load_import_graph, save_import_graph
from .resolver import PathResolver
from .searcher import DependencySearcher
from .ts_parser import ImportOccurrence, scan_imports


__all__ = [
    'AnalyzerConfig',
    'ConfigError',
    'DependencySearcher',
    'ExistenceCache',
    'ImportAnalyzerError',
    'ImportExtractor',
    'ImportOccurrence',
    'ModuleParseError',
    'PathResolver',
    'SourceSyntaxError',
    'build_import_graph',
    'detect_cycles',
    'invert_graph',
    'load_import_graph',
    'save_import_graph',
    'scan_imports',
]
