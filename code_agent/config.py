"""
Configuration constants and settings for the local code agent.
"""

import os
import json

from dotenv import load_dotenv

# =============================================================================
# CONSTANTS AND CONFIGURATION
# =============================================================================

# ANSI escape sequences for colored output
RESET = "\033[0m"
GREY = "\033[90m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
BOLD = "\033[1m"

RULE = "─" * 50
DOUBLE_RULE = "═" * 50

# Folders the tree walker never enters (matched by exact name)
IGNORED_DIRS = {
    "node_modules", ".git", "dist", "build", ".next", "coverage", "__pycache__"
}

# Only these file types are read by the tree walker
SUPPORTED_EXTENSIONS = {
    '.ts', '.js', '.wgsl', '.html', '.css', '.json', '.glsl'
}

# Suffixes tried, in order, when resolving a relative import
RESOLVE_EXTENSIONS = ['.ts', '.js', '.tsx', '.jsx', '.wgsl']

# Upper bound on files handed to the model
MAX_RELEVANT_FILES = 5
FALLBACK_FILE_COUNT = 3

# Files analyzed by the project issue scanner
PROJECT_SCAN_FILE_LIMIT = 10
PROJECT_SCAN_MIN_CHARS = 50

# Words in a request that turn a file question into an edit
EDIT_KEYWORDS = [
    'add', 'remove', 'fix', 'change', 'update', 'modify', 'create',
    'delete', 'refactor', 'improve', 'implement', 'write'
]

# Model defaults
DEFAULT_OLLAMA_HOST = "http://localhost:11434"
DEFAULT_OLLAMA_MODEL = "deepseek-coder:6.7b"
DEFAULT_GEMINI_MODEL = "gemini-1.5-flash"
DEFAULT_MODEL_TIMEOUT = 300.0

SEVERITY_ICONS = {
    'error': '❌',
    'warning': '⚠️',
    'info': 'ℹ️',
    'low': '🟢',
    'medium': '🟡',
    'high': '🟠',
    'critical': '🔴',
}

COMPLEXITY_ICONS = {
    'simple': '🟢',
    'moderate': '🟡',
    'complex': '🔴',
}

FILE_ACTION_ICONS = {
    'create': '➕',
    'modify': '✏️',
    'delete': '🗑️',
}

# Global paths
PROJECT_ROOT = os.getcwd()
CONFIG_FILE = os.path.join(PROJECT_ROOT, ".agent-config.json")

# =============================================================================
# DEFAULT CONFIGURATION
# =============================================================================

DEFAULT_CONFIG = {
    # Tree walker settings
    "exclude_dirs": sorted(IGNORED_DIRS),
    "supported_extensions": sorted(SUPPORTED_EXTENSIONS),

    # Model settings
    "model_backend": "ollama",
    "ollama_host": DEFAULT_OLLAMA_HOST,
    "ollama_model": DEFAULT_OLLAMA_MODEL,
    "gemini_model": DEFAULT_GEMINI_MODEL,
    "model_timeout": DEFAULT_MODEL_TIMEOUT,

    # Knowledge base
    "knowledge_dir": os.path.join(os.path.dirname(os.path.abspath(__file__)), "knowledge_docs"),

    # Project issue scan
    "project_scan_file_limit": PROJECT_SCAN_FILE_LIMIT,
}


# =============================================================================
# CONFIGURATION MANAGEMENT
# =============================================================================

def load_config(config_file=None):
    """Load configuration from .agent-config.json if it exists."""
    config_file = config_file or CONFIG_FILE
    if not os.path.exists(config_file):
        return {}
    try:
        with open(config_file, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError):
        print(f"{YELLOW}⚠ Could not parse {config_file}, using defaults.{RESET}")
        return {}

def load_environment(config=None):
    """
    Merge model settings from the environment (and a .env file) into the config.

    Environment variables win over the config file so a shell export can
    point the agent at another model without editing the project.
    """
    load_dotenv()
    config = dict(config or {})
    env_overrides = {
        "model_backend": os.getenv("MODEL_BACKEND"),
        "ollama_host": os.getenv("OLLAMA_HOST"),
        "ollama_model": os.getenv("OLLAMA_MODEL"),
        "gemini_model": os.getenv("GEMINI_MODEL"),
    }
    for key, value in env_overrides.items():
        if value:
            config[key] = value
    return config

def get_configured_excluded_dirs(config):
    """Get configured excluded directories."""
    return set(config.get("exclude_dirs", DEFAULT_CONFIG["exclude_dirs"]))

def get_configured_extensions(config):
    """Get configured file extensions for the tree walker."""
    exts = config.get("supported_extensions", DEFAULT_CONFIG["supported_extensions"])
    return {ext.lower() for ext in exts}

def get_configured_model_backend(config):
    """Get the model backend name ('ollama' or 'gemini')."""
    return str(config.get("model_backend", DEFAULT_CONFIG["model_backend"])).lower()

def get_configured_ollama_host(config):
    """Get the Ollama server URL."""
    return config.get("ollama_host", DEFAULT_CONFIG["ollama_host"]).rstrip("/")

def get_configured_ollama_model(config):
    """Get the Ollama model name."""
    return config.get("ollama_model", DEFAULT_CONFIG["ollama_model"])

def get_configured_gemini_model(config):
    """Get the Gemini model name."""
    return config.get("gemini_model", DEFAULT_CONFIG["gemini_model"])

def get_configured_model_timeout(config):
    """Get the model request timeout in seconds."""
    return float(config.get("model_timeout", DEFAULT_CONFIG["model_timeout"]))

def get_configured_knowledge_dir(config):
    """Get the directory holding domain knowledge documents."""
    return config.get("knowledge_dir", DEFAULT_CONFIG["knowledge_dir"])

def get_configured_project_scan_limit(config):
    """Get number of files the project issue scanner sends to the model."""
    return int(config.get("project_scan_file_limit", DEFAULT_CONFIG["project_scan_file_limit"]))
