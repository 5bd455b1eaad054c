"""Tests for tree-sitter import scanning."""

import pytest

from import_analyzer.errors import SourceSyntaxError
from import_analyzer.ts_parser import (
    DYNAMIC,
    EXPORT,
    EXPORT_ALL,
    IMPORT,
    ImportOccurrence,
    grammar_for,
    scan_imports,
)


# ─── Fixtures ────────────────────────────────────────────────


SAMPLE_SOURCE = b"""\
import React from 'react';
import { helper } from "./helper";
import './styles.css';
import type { Props } from './types';

export { Button } from './Button';
export * from './theme';
export * as icons from './icons';
export const local = 1;

async function load(name) {
  const page = await import('./pages/home');
  const other = await import(name);
  const templated = await import(`./locale/${name}`);
  return [page, other, templated];
}
"""


def kinds_and_specifiers(occurrences):
    return [(o.kind, o.specifier) for o in occurrences]


# ─── scan_imports ────────────────────────────────────────────


class TestScanImports:
    def test_all_statement_kinds_in_order(self):
        occurrences = scan_imports(SAMPLE_SOURCE, "src/index.ts")
        assert kinds_and_specifiers(occurrences) == [
            (IMPORT, "react"),
            (IMPORT, "./helper"),
            (IMPORT, "./styles.css"),
            (IMPORT, "./types"),
            (EXPORT, "./Button"),
            (EXPORT_ALL, "./theme"),
            (EXPORT_ALL, "./icons"),
            (DYNAMIC, "./pages/home"),
            (DYNAMIC, None),
            (DYNAMIC, None),
        ]

    def test_non_literal_dynamic_imports_are_flagged(self):
        occurrences = scan_imports(SAMPLE_SOURCE, "src/index.ts")
        non_literal = [o for o in occurrences if not o.is_literal]
        assert [o.source_type for o in non_literal] == ["identifier", "template_string"]
        assert [o.line for o in non_literal] == [13, 14]

    def test_line_numbers(self):
        occurrences = scan_imports(SAMPLE_SOURCE, "src/index.ts")
        assert occurrences[0] == ImportOccurrence(IMPORT, "react", 1)
        assert occurrences[7].line == 12

    def test_jsx_source(self):
        source = b"import Thing from './Thing';\nexport default () => <Thing value={1} />;\n"
        assert kinds_and_specifiers(scan_imports(source, "src/App.jsx")) == [(IMPORT, "./Thing")]

    def test_type_assertions_in_ts(self):
        source = b"import { x } from './x';\nconst y = <number>x;\n"
        assert kinds_and_specifiers(scan_imports(source, "src/a.ts")) == [(IMPORT, "./x")]

    def test_local_exports_are_ignored(self):
        source = b"const a = 1;\nexport { a };\nexport default a;\n"
        assert scan_imports(source, "src/a.js") == []

    def test_empty_specifier_is_ignored(self):
        assert scan_imports(b"import x from '';\n", "src/a.js") == []

    def test_plain_calls_are_ignored(self):
        assert scan_imports(b"require('./x');\nload('./y');\n", "src/a.js") == []


    def test_escape_sequences_are_decoded(self):
        source = b"import a from '.\\/a\\x62\\u{63}\\u0064';\nexport * from './e\\\\f';\n"
        assert kinds_and_specifiers(scan_imports(source, "src/a.js")) == [
            (IMPORT, "./abcd"),
            (EXPORT_ALL, "./e\\f"),
        ]

    def test_invalid_utf8_is_replaced(self):
        occurrences = scan_imports(b"import b from './b\xff';\n", "src/a.js")
        assert kinds_and_specifiers(occurrences) == [(IMPORT, "./b\ufffd")]


class TestSyntaxErrors:
    def test_malformed_source_raises(self):
        with pytest.raises(SourceSyntaxError) as exc_info:
            scan_imports(b"import { from './x';\nconst = ;\n", "src/broken.js")
        assert exc_info.value.filename == "src/broken.js"
        assert exc_info.value.line >= 1

    def test_grammar_selection(self):
        assert grammar_for("a.ts") == "typescript"
        assert grammar_for("a.tsx") == "tsx"
        assert grammar_for("a.js") == "tsx"
        assert grammar_for("a.jsx") == "tsx"
