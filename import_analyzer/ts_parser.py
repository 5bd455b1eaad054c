"""
Import scanning for JavaScript and TypeScript sources.

Parses a file with tree-sitter and reports every statement that pulls in
another module:

    import x from './x';          kind "import"
    import './side-effect';       kind "import"
    import('./x')                 kind "dynamic"
    export { x } from './x';      kind "export"
    export * from './x';          kind "export_all"

Dynamic imports whose argument is not a plain string literal are still
reported, with ``specifier`` set to None, so callers can decide what to do
with them.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Optional

import tree_sitter
import tree_sitter_typescript

from .errors import SourceSyntaxError

IMPORT = "import"
DYNAMIC = "dynamic"
EXPORT = "export"
EXPORT_ALL = "export_all"


@dataclass(frozen=True)
class ImportOccurrence:
    kind: str
    specifier: Optional[str]
    line: int
    source_type: str = "string"

    @property
    def is_literal(self) -> bool:
        return self.specifier is not None


@lru_cache(maxsize=None)
def _get_parser(grammar: str) -> tree_sitter.Parser:
    """Get or create a tree-sitter parser for ``grammar`` ("typescript" or "tsx")."""
    if grammar == "typescript":
        language = tree_sitter.Language(tree_sitter_typescript.language_typescript())
    else:
        language = tree_sitter.Language(tree_sitter_typescript.language_tsx())
    return tree_sitter.Parser(language)


def grammar_for(filename: str) -> str:
    # The tsx grammar is a superset that also accepts plain JS and JSX, but it
    # rejects angle-bracket type assertions, which only .ts files may use.
    if os.path.splitext(filename)[1] == ".ts":
        return "typescript"
    return "tsx"


_SIMPLE_ESCAPES = {
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
}


def _node_text(node) -> str:
    # Invalid UTF-8 becomes U+FFFD, the same as reading the file as utf8 text.
    return node.text.decode("utf-8", errors="replace")


def _decode_escape(sequence: str) -> str:
    """Decode one JS escape sequence such as ``\\n``, ``\\x41`` or ``\\u{1F600}``."""
    body = sequence[1:]
    if not body:
        return ""
    try:
        if body.startswith("u{"):
            return chr(int(body[2:-1], 16))
        if body[0] in "ux" and len(body) > 1:
            return chr(int(body[1:], 16))
        if body[0] in "01234567":
            return chr(int(body, 8))
    except ValueError:
        # Out of range code point; keep the text as written.
        return body
    if body[0] in "\r\n\u2028\u2029":
        # Line continuation
        return ""
    return _SIMPLE_ESCAPES.get(body[0], body)


def _string_value(node) -> Optional[str]:
    if node is None or node.type != "string":
        return None
    parts = []
    for child in node.named_children:
        if child.type == "escape_sequence":
            parts.append(_decode_escape(_node_text(child)))
        else:
            parts.append(_node_text(child))
    return "".join(parts) or None


def _first_error(node):
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == "ERROR" or current.is_missing:
            return current
        if current.has_error:
            stack.extend(reversed(current.children))
    return node


def _export_kind(node) -> str:
    for child in node.children:
        if child.type in ("*", "namespace_export"):
            return EXPORT_ALL
    return EXPORT


def _dynamic_import(node) -> Optional[ImportOccurrence]:
    function = node.child_by_field_name("function")
    if function is None or function.type != "import":
        return None
    arguments = node.child_by_field_name("arguments")
    if arguments is None or not arguments.named_children:
        return None
    argument = arguments.named_children[0]
    line = node.start_point[0] + 1
    if argument.type != "string":
        return ImportOccurrence(DYNAMIC, None, line, argument.type)
    specifier = _string_value(argument)
    if specifier is None:
        return None
    return ImportOccurrence(DYNAMIC, specifier, line)


def scan_imports(source: bytes, filename: str) -> List[ImportOccurrence]:
    """Return the import occurrences of one file in source order.

    Raises:
        SourceSyntaxError: if the parse tree contains error or missing nodes.
    """
    tree = _get_parser(grammar_for(filename)).parse(source)
    root = tree.root_node
    if root.has_error:
        error = _first_error(root)
        row, column = error.start_point
        raise SourceSyntaxError(filename, row + 1, column + 1)

    occurrences: List[ImportOccurrence] = []
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "import_statement":
            specifier = _string_value(node.child_by_field_name("source"))
            if specifier is not None:
                occurrences.append(ImportOccurrence(IMPORT, specifier, node.start_point[0] + 1))
        elif node.type == "export_statement":
            specifier = _string_value(node.child_by_field_name("source"))
            if specifier is not None:
                occurrences.append(ImportOccurrence(_export_kind(node), specifier, node.start_point[0] + 1))
        elif node.type == "call_expression":
            occurrence = _dynamic_import(node)
            if occurrence is not None:
                occurrences.append(occurrence)
        # Depth-first, left to right.
        stack.extend(reversed(node.children))
    return occurrences
