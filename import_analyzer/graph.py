"""
Import graph utilities: adjacency maps, inversion, and cycle detection.

The graph uses the natural import direction:
- If file A imports file B, there is an edge A -> B (B is in graph[A]).
"""

from __future__ import annotations

import json
import logging
from collections import defaultdict
from pathlib import Path
from typing import TYPE_CHECKING, Dict, List, Sequence, Set

if TYPE_CHECKING:
    from .searcher import DependencySearcher

logger = logging.getLogger(__name__)


def _normalize_graph(graph: Dict[str, Set[str]]) -> Dict[str, Set[str]]:
    """Return a copy of the graph that includes all referenced nodes.

    Some files only appear as import targets (e.g. JSON modules); this
    ensures they are present as keys with an empty import set.
    """
    normalized: Dict[str, Set[str]] = {node: set(deps) for node, deps in graph.items()}
    for node, deps in list(normalized.items()):
        for dep in deps:
            if dep not in normalized:
                normalized[dep] = set()
    return normalized


def build_import_graph(searcher: "DependencySearcher", filenames: Sequence[str]) -> Dict[str, Set[str]]:
    """Map every file in ``filenames`` to its direct imports.

    Raises:
        ModuleParseError: if any of the files cannot be parsed.
    """
    graph: Dict[str, Set[str]] = {}
    for filename in filenames:
        graph[filename] = set(searcher.extractor.direct_imports(filename))
    return graph


def invert_graph(graph: Dict[str, Set[str]]) -> Dict[str, Set[str]]:
    """Return target -> set of files importing it directly."""
    dependants: Dict[str, Set[str]] = defaultdict(set)
    for node, deps in _normalize_graph(graph).items():
        dependants.setdefault(node, set())
        for dep in deps:
            dependants[dep].add(node)
    return dict(dependants)


def detect_cycles(graph: Dict[str, Set[str]]) -> List[List[str]]:
    """
    Detect import cycles using Tarjan's algorithm to find strongly
    connected components.

    Args:
        graph: file -> set of directly imported files

    Returns:
        Sorted list of cycles, each a sorted list of files. Includes
        self-imports (a file that imports itself).
    """
    graph = _normalize_graph(graph)

    index_counter = [0]
    index: Dict[str, int] = {}
    lowlink: Dict[str, int] = {}
    onstack: Set[str] = set()
    stack: List[str] = []
    result: List[List[str]] = []

    def strongconnect(node: str) -> None:
        index[node] = index_counter[0]
        lowlink[node] = index_counter[0]
        index_counter[0] += 1
        stack.append(node)
        onstack.add(node)

        for successor in sorted(graph.get(node, set())):
            if successor not in index:
                strongconnect(successor)
                lowlink[node] = min(lowlink[node], lowlink[successor])
            elif successor in onstack:
                lowlink[node] = min(lowlink[node], index[successor])

        # Root of an SCC: pop it off the stack
        if lowlink[node] == index[node]:
            scc = []
            while True:
                member = stack.pop()
                onstack.remove(member)
                scc.append(member)
                if member == node:
                    break

            if len(scc) > 1 or scc[0] in graph.get(scc[0], set()):
                result.append(sorted(scc))

    for node in sorted(graph):
        if node not in index:
            strongconnect(node)

    if result:
        logger.info("Detected %d import cycle(s)", len(result))
    return sorted(result)


def save_import_graph(graph: Dict[str, Set[str]], path: Path) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    serializable = {node: sorted(deps) for node, deps in sorted(graph.items())}
    path.write_text(json.dumps(serializable, ensure_ascii=False, indent=2), encoding="utf-8")
    logger.info("Saved import graph with %d file(s) to %s", len(serializable), path)


def load_import_graph(path: Path) -> Dict[str, Set[str]]:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return {node: set(deps) for node, deps in data.items()}
