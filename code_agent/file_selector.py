"""
File selection - narrows a project down to the few files worth sending to the model.

Only MAX_RELEVANT_FILES files ever leave this module, never the full repo.
"""

import os
import re

from .config import (
    BOLD, RESET, GREY, GREEN, YELLOW,
    MAX_RELEVANT_FILES, FALLBACK_FILE_COUNT
)
from .models import ScannedFile
from .repo_scanner import scan_repository
from .utils import read_text_file, resolve_against_base


class NoFilesFoundError(Exception):
    """Raised when no file could be selected for a problem."""


# Stack-trace shaped paths, tried in this order
STACKTRACE_PATTERNS = [
    re.compile(r"at\s+.*?\((.+?\.(ts|js|tsx|jsx)):\d+:\d+\)"),  # at Function (/path/file.ts:10:5)
    re.compile(r"at\s+(.+?\.(ts|js|tsx|jsx)):\d+:\d+"),         # at /path/file.ts:10:5
    re.compile(r"([a-zA-Z]:\\[^:]+\.(ts|js|tsx|jsx))"),         # Windows paths
    re.compile(r"([\/][^:\s]+\.(ts|js|tsx|jsx))"),              # Unix paths
]

# =============================================================================
# PATH EXTRACTION AND LOADING
# =============================================================================

def extract_files_from_error(error_log):
    """
    Extract candidate file paths from an error log or stack trace.

    Returns:
        list[str]: Unique paths in order of first match.
    """
    matches = []
    for pattern in STACKTRACE_PATTERNS:
        for match in pattern.finditer(error_log):
            matches.append(match.group(1))

    return list(dict.fromkeys(matches))

def load_files(file_paths, base_path, limit=MAX_RELEVANT_FILES):
    """
    Load the given paths that exist, in order, up to `limit` files.

    Relative paths are joined onto base_path. Missing or unreadable paths
    are skipped without raising.
    """
    files = []

    for file_path in file_paths:
        if len(files) >= limit:
            break

        absolute_path = resolve_against_base(file_path, base_path)
        if not os.path.isfile(absolute_path):
            continue

        try:
            content = read_text_file(absolute_path)
        except (OSError, UnicodeDecodeError):
            print(f"{YELLOW}   ⚠ Could not load: {file_path}{RESET}")
            continue

        files.append(ScannedFile.from_path(absolute_path, content))
        print(f"{GREEN}   ✅ {os.path.basename(absolute_path)}{RESET}")

    return files

# =============================================================================
# KEYWORD SCORING
# =============================================================================

def extract_keywords(description):
    """Lower-cased words longer than 3 characters. Duplicates are kept."""
    return [word for word in description.lower().split() if len(word) > 3]

def score_files(files, description):
    """
    Score each file by how many description keywords it mentions.

    A keyword found in the content adds 1, found in the file name adds 2.

    Returns:
        list[tuple[ScannedFile, int]]: Scores in scan order.
    """
    keywords = extract_keywords(description)
    scored = []

    for scanned in files:
        score = 0
        lower_content = scanned.content.lower()
        lower_name = scanned.name.lower()

        for keyword in keywords:
            if keyword in lower_content:
                score += 1
            if keyword in lower_name:
                score += 2

        scored.append((scanned, score))

    return scored

def rank_by_keywords(files, description, limit=MAX_RELEVANT_FILES):
    """Files with a positive score, best first; ties keep scan order."""
    scored = [item for item in score_files(files, description) if item[1] > 0]
    scored.sort(key=lambda item: item[1], reverse=True)
    return [scanned for scanned, _ in scored[:limit]]

# =============================================================================
# RELEVANCE CASCADE
# =============================================================================

def select_relevant_files(problem, config=None):
    """
    Pick at most MAX_RELEVANT_FILES files for a problem.

    Stages, first non-empty result wins:
        1. Explicit file paths given by the caller.
        2. Paths extracted from the error log's stack trace.
        3. Keyword scoring over a full project scan.
        4. The first few files of the scan.

    Args:
        problem (ProblemInput): The problem to find files for.
        config (dict, optional): Passed through to the tree walker.

    Returns:
        list[ScannedFile]: Between 1 and MAX_RELEVANT_FILES files.

    Raises:
        NoFilesFoundError: If every stage came up empty.
    """
    print(f"\n{BOLD}🔍 Finding related files...{RESET}")

    if problem.file_paths:
        print(f"{GREY}   Using specified files...{RESET}")
        files = load_files(problem.file_paths, problem.base_path)
        if files:
            return files

    if problem.error_log:
        print(f"{GREY}   Extracting from stacktrace...{RESET}")
        candidates = extract_files_from_error(problem.error_log)
        print(f"{GREY}   Found {len(candidates)} paths in stacktrace{RESET}")
        files = load_files(candidates, problem.base_path)
        if files:
            return files

    print(f"{GREY}   Scanning project for relevant files...{RESET}")
    all_files = scan_repository(problem.base_path, config=config, verbose=False)

    relevant = rank_by_keywords(all_files, problem.description)
    if relevant:
        for scanned in relevant:
            print(f"{GREEN}   ✅ {scanned.name}{RESET}")
        return relevant

    if all_files:
        print(f"{GREY}   Using first few project files...{RESET}")
        return all_files[:FALLBACK_FILE_COUNT]

    raise NoFilesFoundError(
        "No files found to analyze. Specify files with --files or provide a project path with code."
    )
