"""
Dependency analysis - parses import statements and builds a file dependency map.
"""

import os
import re
from collections import defaultdict

from .config import BOLD, RESET, GREY, GREEN, RULE, DOUBLE_RULE, RESOLVE_EXTENSIONS
from .models import ImportRecord

# =============================================================================
# IMPORT PARSING
# =============================================================================

# import { x } from './a' | import x from './a' | import * as x from './a' | import './a'
ES_IMPORT_PATTERN = re.compile(r"""^import\s+.*?from\s+['"](.+?)['"]|^import\s+['"](.+?)['"]""")
# const x = require('./a') | require('./a')
REQUIRE_PATTERN = re.compile(r"""require\s*\(\s*['"](.+?)['"]\s*\)""")


class ImportParser:
    """Pattern-matches import and require statements, one per line."""

    @staticmethod
    def parse_imports(content):
        """
        Parse import statements from file content.

        Multi-line imports and several statements on one line are not
        fully extracted; only the first match on each line counts.

        Args:
            content (str): File content.

        Returns:
            list[ImportRecord]: One record per matching line, in file order.
        """
        imports = []

        for line in content.split("\n"):
            trimmed = line.strip()

            # Skip comments
            if trimmed.startswith("//") or trimmed.startswith("*"):
                continue

            match = ES_IMPORT_PATTERN.match(trimmed)
            if match:
                imports.append(ImportParser.create_import_record(trimmed, match.group(1) or match.group(2)))
                continue

            match = REQUIRE_PATTERN.search(trimmed)
            if match:
                imports.append(ImportParser.create_import_record(trimmed, match.group(1)))

        return imports

    @staticmethod
    def create_import_record(raw, module_path):
        is_relative = module_path.startswith("./") or module_path.startswith("../")
        return ImportRecord(
            raw=raw,
            module=module_path,
            is_relative=is_relative,
            is_package=not is_relative
        )

# =============================================================================
# RESOLUTION
# =============================================================================

def resolve_import(module_path, existing_files):
    """
    Resolve an import path to the name of a scanned file.

    Matching is on basenames within the scan batch, not the filesystem:
    exact name, then name + extension, then an index file.

    Args:
        module_path (str): e.g. './utils/Pipeline'
        existing_files (set[str]): Names of all files in the batch.

    Returns:
        str | None: The matched file name.
    """
    base_name = os.path.basename(module_path)

    if base_name in existing_files:
        return base_name

    for ext in RESOLVE_EXTENSIONS:
        with_ext = base_name + ext
        if with_ext in existing_files:
            return with_ext

    for ext in RESOLVE_EXTENSIONS:
        index_file = f"index{ext}"
        if index_file in existing_files:
            return index_file

    return None

def build_dependency_map(files, verbose=True):
    """
    Build a file -> [imported files] map for a scan batch.

    Every file gets an entry. Package imports and relative imports that do
    not match a file in the batch are left out.

    Args:
        files (list[ScannedFile]): The scan batch.

    Returns:
        dict[str, list[str]]: e.g. {"Renderer.ts": ["Pipeline.ts", "Shader.ts"]}
    """
    if verbose:
        print(f"\n{BOLD}🔗 Building dependency map...{RESET}")
        print(f"{GREY}{RULE}{RESET}")

    dependency_map = {}
    file_names = {f.name for f in files}

    for scanned in files:
        dependencies = []
        for imp in ImportParser.parse_imports(scanned.content):
            if not imp.is_relative:
                continue
            resolved = resolve_import(imp.module, file_names)
            if resolved:
                dependencies.append(resolved)

        dependency_map[scanned.name] = dependencies

        if verbose and dependencies:
            print(f"   {scanned.name} → {', '.join(dependencies)}")

    if verbose:
        print(f"{GREY}{RULE}{RESET}")
        print(f"{GREEN}✅ Mapped {len(dependency_map)} files{RESET}\n")

    return dependency_map

def analyze_file_dependencies(scanned, all_files):
    """Get detailed dependency analysis for a single file."""
    file_names = {f.name for f in all_files}
    imports = ImportParser.parse_imports(scanned.content)

    depends_on = []
    for imp in imports:
        if imp.is_relative:
            resolved = resolve_import(imp.module, file_names)
            if resolved:
                depends_on.append(resolved)

    return {
        'file': scanned.name,
        'imports': imports,
        'depends_on': depends_on
    }

def find_dependents(target_file, dependency_map):
    """Find files that import a specific file (reverse dependencies)."""
    return [name for name, deps in dependency_map.items() if target_file in deps]

# =============================================================================
# DEPENDENCY GRAPH
# =============================================================================

class DependencyGraph:
    """Adjacency and reverse adjacency over a dependency map."""

    def __init__(self):
        self.imports = defaultdict(set)  # file -> set of files it imports
        self.imported_by = defaultdict(set)  # file -> set of files that import it
        self.all_files = set()

    @classmethod
    def from_dependency_map(cls, dependency_map):
        graph = cls()
        for from_file, to_files in dependency_map.items():
            graph.all_files.add(from_file)
            for to_file in to_files:
                graph.add_dependency(from_file, to_file)
        return graph

    def add_dependency(self, from_file, to_file):
        """Add a dependency relationship."""
        self.imports[from_file].add(to_file)
        self.imported_by[to_file].add(from_file)
        self.all_files.add(from_file)
        self.all_files.add(to_file)

    def get_import_count(self, file_name):
        """Get number of files that import this file."""
        return len(self.imported_by.get(file_name, ()))

    def find_circular_dependencies(self):
        """Find circular dependencies using DFS."""
        visited = set()
        rec_stack = set()
        cycles = []

        def dfs(node, path):
            if node in rec_stack:
                cycle_start = path.index(node)
                cycles.append(path[cycle_start:] + [node])
                return

            if node in visited:
                return

            visited.add(node)
            rec_stack.add(node)
            path.append(node)

            for neighbor in sorted(self.imports.get(node, ())):
                dfs(neighbor, path)

            path.pop()
            rec_stack.remove(node)

        for name in sorted(self.all_files):
            if name not in visited:
                dfs(name, [])

        return cycles

# =============================================================================
# OUTPUT
# =============================================================================

def print_dependency_map(dependency_map):
    """Print the dependency map as a tree."""
    print(f"\n{BOLD}🔍 Dependency Map:{RESET}")
    print(DOUBLE_RULE)

    for name, deps in dependency_map.items():
        if deps:
            print(f"\n📄 {name}")
            for dep in deps:
                print(f"   └─ {dep}")

    print(f"\n{DOUBLE_RULE}")
