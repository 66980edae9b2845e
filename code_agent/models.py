"""
Value types passed between the scanning and selection stages.
"""

import os
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class ScannedFile:
    """A file read during a scan. Immutable once created."""
    name: str
    path: str
    content: str
    extension: str

    @classmethod
    def from_path(cls, path: str, content: str) -> "ScannedFile":
        return cls(
            name=os.path.basename(path),
            path=path,
            content=content,
            extension=os.path.splitext(path)[1].lower(),
        )

    @property
    def line_count(self) -> int:
        return len(self.content.split("\n"))

    def to_dict(self, include_content: bool = True):
        data = {
            "name": self.name,
            "path": self.path,
            "extension": self.extension,
            "lines": self.line_count,
        }
        if include_content:
            data["content"] = self.content
        return data


@dataclass(frozen=True)
class ImportRecord:
    """One import/require statement found in a file."""
    raw: str
    module: str
    is_relative: bool
    is_package: bool


@dataclass(frozen=True)
class ProblemInput:
    """
    What the user wants looked at.

    Attributes:
        description: Free-text description of the bug or request.
        error_log: Optional stack trace or error output.
        file_paths: Optional explicit files, absolute or relative to base_path.
        base_path: Project root used to resolve relative paths.
    """
    description: str
    base_path: str
    error_log: Optional[str] = None
    file_paths: Optional[Tuple[str, ...]] = None

    def __post_init__(self):
        if self.file_paths is not None and not isinstance(self.file_paths, tuple):
            object.__setattr__(self, "file_paths", tuple(self.file_paths))
