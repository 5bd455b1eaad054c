"""Tests for PathResolver search order."""

import pytest

from import_analyzer.file_cache import ExistenceCache
from import_analyzer.resolver import PathResolver


@pytest.fixture
def resolver():
    return PathResolver(ExistenceCache())


class TestRelativeImports:
    def test_extension_inferred(self, tree, resolver):
        tree({"src/a.js": "", "src/b.ts": ""})
        assert resolver.resolve("src/a.js", "./b") == "src/b.ts"

    def test_parent_directory_is_normalized(self, tree, resolver):
        tree({"src/deep/a.js": "", "src/util.js": ""})
        assert resolver.resolve("src/deep/a.js", "../util") == "src/util.js"
        assert resolver.resolve("src/deep/a.js", "./../util.js") == "src/util.js"

    def test_file_at_working_directory_root(self, tree, resolver):
        tree({"a.js": "", "b.js": ""})
        assert resolver.resolve("a.js", "./b") == "b.js"

    def test_index_file(self, tree, resolver):
        tree({"src/a.js": "", "src/widgets/index.tsx": ""})
        assert resolver.resolve("src/a.js", "./widgets") == "src/widgets/index.tsx"

    def test_exact_asset(self, tree, resolver):
        tree({"src/a.js": "", "src/logo.svg": ""})
        assert resolver.resolve("src/a.js", "./logo.svg") == "src/logo.svg"

    def test_missing(self, tree, resolver):
        tree({"src/a.js": ""})
        assert resolver.resolve("src/a.js", "./nope") is None


class TestRootedImports:
    def test_searches_app_then_packages(self, tree, resolver):
        tree({"packages/ui/Button.js": "", "src/a.js": ""})
        assert resolver.resolve("src/a.js", "ui/Button") == "packages/ui/Button.js"

    def test_earlier_root_wins(self, tree, resolver):
        tree({"app/shared.js": "", "packages/shared.js": "", "src/a.js": ""})
        assert resolver.resolve("src/a.js", "shared") == "app/shared.js"

    def test_rooted_import_ignores_importing_directory(self, tree, resolver):
        tree({"src/shared.js": "", "src/a.js": ""})
        assert resolver.resolve("src/a.js", "shared") is None

    def test_external_package(self, tree, resolver):
        tree({"src/a.js": ""})
        assert resolver.resolve("src/a.js", "react") is None

    def test_custom_roots(self, tree):
        tree({"lib/x.js": ""})
        resolver = PathResolver(ExistenceCache(), resolve_dirs=["lib"])
        assert resolver.resolve("src/a.js", "x") == "lib/x.js"


class TestPriority:
    def test_exact_beats_extension(self, tree, resolver):
        tree({"app/Foo": "", "app/Foo.js": ""})
        assert resolver.resolve("src/a.js", "Foo") == "app/Foo"

    def test_js_beats_ts(self, tree, resolver):
        tree({"app/Foo.ts": "", "app/Foo.js": ""})
        assert resolver.resolve("src/a.js", "Foo") == "app/Foo.js"

    def test_extension_order(self, resolver):
        candidates = list(resolver.candidates("app", "Foo"))
        assert candidates == [
            "app/Foo",
            "app/Foo.js",
            "app/Foo.jsx",
            "app/Foo.ts",
            "app/Foo.tsx",
            "app/Foo.json",
            "app/Foo/index.js",
            "app/Foo/index.jsx",
            "app/Foo/index.ts",
            "app/Foo/index.tsx",
            "app/Foo/index.json",
        ]

    def test_json_extension_beats_any_index(self, tree, resolver):
        tree({"app/Foo/index.js": "", "app/Foo.json": ""})
        assert resolver.resolve("src/a.js", "Foo") == "app/Foo.json"

    def test_index_only_when_no_extension_matches(self, tree, resolver):
        tree({"app/Foo/index.ts": "", "app/Foo/index.js": ""})
        assert resolver.resolve("src/a.js", "Foo") == "app/Foo/index.js"

    def test_deterministic(self, tree):
        tree({"app/Foo.ts": "", "app/Foo.tsx": "", "app/Foo/index.js": ""})
        results = {PathResolver(ExistenceCache()).resolve("src/a.js", "Foo") for _ in range(5)}
        assert results == {"app/Foo.ts"}
