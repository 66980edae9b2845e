"""
Local Code Agent - debug, explain and extend a codebase with a local model.

Scans a project, picks the few files that matter for a problem and asks a
locally hosted model (Ollama by default) about them.
"""

__version__ = "0.1.0"

from .main import main
from .models import ScannedFile, ImportRecord, ProblemInput
from .repo_scanner import scan_repository
from .dependency_analysis import DependencyGraph, ImportParser, build_dependency_map, find_dependents
from .file_selector import select_relevant_files, NoFilesFoundError
from .llm_client import OllamaClient, GeminiClient, ModelQueryError, create_client
from .session import AgentSession

__all__ = [
    'main',
    'ScannedFile',
    'ImportRecord',
    'ProblemInput',
    'scan_repository',
    'DependencyGraph',
    'ImportParser',
    'build_dependency_map',
    'find_dependents',
    'select_relevant_files',
    'NoFilesFoundError',
    'OllamaClient',
    'GeminiClient',
    'ModelQueryError',
    'create_client',
    'AgentSession',
]
