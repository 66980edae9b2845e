"""
Utility functions for file operations and console output.
"""

import os
import re
import sys

from .config import YELLOW, RESET

# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================

def read_text_file(file_path):
    """
    Read a UTF-8 text file.

    Raises OSError or UnicodeDecodeError; callers decide whether a failure
    skips the file or aborts.
    """
    with open(file_path, "r", encoding="utf-8") as f:
        return f.read()

def write_text_file(file_path, content):
    """Write content to a file as UTF-8, creating parent directories."""
    parent = os.path.dirname(os.path.abspath(file_path))
    os.makedirs(parent, exist_ok=True)
    with open(file_path, "w", encoding="utf-8") as f:
        f.write(content)

def resolve_against_base(file_path, base_path):
    """Return file_path unchanged when absolute, otherwise joined onto base_path."""
    if os.path.isabs(file_path):
        return file_path
    return os.path.join(base_path, file_path)

def remove_ansi_colors(text):
    """Remove ANSI color codes from text."""
    if not text:
        return ""
    return re.sub(r"\033\[[0-9;]*m", "", text)

def warn(message):
    """Print a warning line to stderr."""
    print(f"{YELLOW}   ⚠ {message}{RESET}", file=sys.stderr)
