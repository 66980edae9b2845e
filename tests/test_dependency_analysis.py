#!/usr/bin/env python3
"""
Tests for import extraction, import resolution and the dependency map.
"""

import unittest
import os
import sys

sys.path.insert(0, os.path.dirname(__file__))

import fake_client  # noqa: F401  (puts the repo root on sys.path)
from code_agent.dependency_analysis import (
    ImportParser, resolve_import, build_dependency_map, find_dependents,
    analyze_file_dependencies, DependencyGraph
)
from code_agent.models import ScannedFile


def make_files(contents):
    return [ScannedFile.from_path(os.path.join("/project", path), content) for path, content in contents.items()]


class TestImportParser(unittest.TestCase):
    """Test that import statements are recognized line by line."""

    def test_es_import_forms(self):
        content = "\n".join([
            "import { Pipeline } from './Pipeline';",
            "import Shader from \"../gfx/Shader\";",
            "import * as math from './math';",
            "import './styles.css';",
            "import React from 'react';",
        ])

        imports = ImportParser.parse_imports(content)

        self.assertEqual(
            [imp.module for imp in imports],
            ["./Pipeline", "../gfx/Shader", "./math", "./styles.css", "react"]
        )
        self.assertEqual([imp.is_relative for imp in imports], [True, True, True, True, False])
        self.assertTrue(all(imp.is_package == (not imp.is_relative) for imp in imports))

    def test_require_calls(self):
        content = "const fs = require('fs');\nconst helper = require( \"./helper\" );"

        imports = ImportParser.parse_imports(content)

        self.assertEqual([imp.module for imp in imports], ["fs", "./helper"])
        self.assertTrue(imports[0].is_package)
        self.assertTrue(imports[1].is_relative)
        self.assertEqual(imports[1].raw, 'const helper = require( "./helper" );')

    def test_comment_lines_are_ignored(self):
        content = "\n".join([
            "// import { a } from './a';",
            "/**",
            " * import { b } from './b';",
            " */",
            "import { c } from './c';",
        ])

        imports = ImportParser.parse_imports(content)

        self.assertEqual([imp.module for imp in imports], ["./c"])

    def test_only_first_statement_per_line(self):
        content = "import { a } from './a'; import { b } from './b';"

        imports = ImportParser.parse_imports(content)

        self.assertEqual(len(imports), 1)
        self.assertEqual(imports[0].module, "./a")

    def test_no_imports(self):
        self.assertEqual(ImportParser.parse_imports(""), [])
        self.assertEqual(ImportParser.parse_imports("const x = 1;\nexport default x;"), [])


class TestImportResolution(unittest.TestCase):
    """Test resolution of relative imports against the scan batch."""

    def test_exact_then_extension_then_index(self):
        existing = {"shared.ts", "Shader.wgsl", "config.json", "index.js"}

        self.assertEqual(resolve_import("./config.json", existing), "config.json")
        self.assertEqual(resolve_import("./shared", existing), "shared.ts")
        self.assertEqual(resolve_import("../gfx/Shader", existing), "Shader.wgsl")
        self.assertEqual(resolve_import("./components", existing), "index.js")

    def test_extension_order_prefers_ts(self):
        self.assertEqual(resolve_import("./util", {"util.js", "util.ts"}), "util.ts")

    def test_unresolvable(self):
        self.assertIsNone(resolve_import("./missing", {"other.ts"}))


class TestDependencyMap(unittest.TestCase):
    """Test the file -> imported files map."""

    def test_helper_imports_shared(self):
        files = make_files({
            "utils/helper.ts": "import { shared } from './shared';\nexport const helper = () => shared;",
            "utils/shared.ts": "export const shared = 1;",
        })

        dependency_map = build_dependency_map(files, verbose=False)

        self.assertEqual(dependency_map["helper.ts"], ["shared.ts"])
        self.assertEqual(dependency_map["shared.ts"], [])
        self.assertIn("helper.ts", find_dependents("shared.ts", dependency_map))

    def test_every_file_has_an_entry_and_targets_are_in_batch(self):
        files = make_files({
            "main.ts": "import React from 'react';\nimport { x } from './missing';\nimport { y } from './lib';",
            "lib.ts": "const path = require('path');",
            "style.css": "body {}",
        })

        dependency_map = build_dependency_map(files, verbose=False)

        self.assertEqual(set(dependency_map), {"main.ts", "lib.ts", "style.css"})
        self.assertEqual(dependency_map["main.ts"], ["lib.ts"])
        names = {f.name for f in files}
        for targets in dependency_map.values():
            self.assertTrue(set(targets) <= names)

    def test_analyze_single_file(self):
        files = make_files({
            "a.ts": "import { b } from './b';\nimport lodash from 'lodash';",
            "b.ts": "export const b = 1;",
        })

        result = analyze_file_dependencies(files[0], files)

        self.assertEqual(result['file'], "a.ts")
        self.assertEqual(len(result['imports']), 2)
        self.assertEqual(result['depends_on'], ["b.ts"])

    def test_find_dependents_of_unused_file(self):
        self.assertEqual(find_dependents("lonely.ts", {"a.ts": ["b.ts"], "b.ts": []}), [])


class TestDependencyGraph(unittest.TestCase):
    """Test graph construction and cycle detection."""

    def test_graph_from_map(self):
        graph = DependencyGraph.from_dependency_map({
            "a.ts": ["b.ts", "c.ts"],
            "b.ts": ["c.ts"],
            "c.ts": [],
        })

        self.assertEqual(graph.imports["a.ts"], {"b.ts", "c.ts"})
        self.assertEqual(graph.get_import_count("c.ts"), 2)
        self.assertEqual(graph.get_import_count("a.ts"), 0)
        self.assertEqual(graph.find_circular_dependencies(), [])

    def test_circular_dependency_is_found(self):
        graph = DependencyGraph.from_dependency_map({
            "a.ts": ["b.ts"],
            "b.ts": ["c.ts"],
            "c.ts": ["a.ts"],
        })

        cycles = graph.find_circular_dependencies()

        self.assertEqual(cycles, [["a.ts", "b.ts", "c.ts", "a.ts"]])


if __name__ == '__main__':
    unittest.main()
