"""
Repository scanner - walks a project folder and reads its source files.

No model calls here, only filesystem reads.
"""

import os
from collections import Counter

from .config import (
    BOLD, RESET, GREY, GREEN, RULE,
    IGNORED_DIRS, SUPPORTED_EXTENSIONS,
    get_configured_excluded_dirs, get_configured_extensions
)
from .models import ScannedFile
from .utils import read_text_file, warn

# =============================================================================
# TREE WALKER
# =============================================================================

def scan_repository(root_path, config=None, verbose=True):
    """
    Scan a directory tree and return every allow-listed file with its content.

    Args:
        root_path (str): Directory to scan. Resolved to an absolute path first.
        config (dict, optional): May override `exclude_dirs` and
            `supported_extensions`.
        verbose (bool): Print each file as it is read.

    Returns:
        list[ScannedFile]: Files in traversal order.
    """
    absolute_path = os.path.abspath(root_path)
    excluded_dirs = get_configured_excluded_dirs(config) if config else IGNORED_DIRS
    extensions = get_configured_extensions(config) if config else SUPPORTED_EXTENSIONS

    if verbose:
        print(f"\n{BOLD}📂 Scanning: {absolute_path}{RESET}")
        print(f"{GREY}{RULE}{RESET}")

    files = []

    def on_walk_error(error):
        warn(f"Could not read directory {error.filename}: {error.strerror}")

    for root, dirs, filenames in os.walk(absolute_path, onerror=on_walk_error):
        # Prune ignored directories in-place; sort so the order is stable across runs
        dirs[:] = sorted(d for d in dirs if d not in excluded_dirs)

        for filename in sorted(filenames):
            ext = os.path.splitext(filename)[1].lower()
            if ext not in extensions:
                continue

            full_path = os.path.join(root, filename)
            # Symlinked files are not followed
            if os.path.islink(full_path) or not os.path.isfile(full_path):
                continue

            try:
                content = read_text_file(full_path)
            except (OSError, UnicodeDecodeError) as e:
                warn(f"Could not read: {filename} ({e.__class__.__name__})")
                continue

            files.append(ScannedFile(
                name=filename,
                path=full_path,
                content=content,
                extension=ext
            ))
            if verbose:
                print(f"{GREY}   📄 {filename}{RESET}")

    if verbose:
        print(f"\n{GREEN}✅ Found {len(files)} files{RESET}")
        print(f"{GREY}{RULE}{RESET}")
        for ext, count in summarize_by_extension(files).items():
            print(f"   {ext}: {count} files")

    return files

def summarize_by_extension(files):
    """Count scanned files per extension, in first-seen order."""
    return dict(Counter(f.extension for f in files))

def get_file_list(files):
    """Get just the file names."""
    return [f.name for f in files]

def print_scanned_files(files):
    """Print each scanned file with its line count."""
    print(f"\n{BOLD}📋 Scanned Files:{RESET}")
    print(f"{GREY}{RULE}{RESET}")
    for f in files:
        print(f"   {f.name} ({f.line_count} lines)")
