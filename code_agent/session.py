"""
Agent session state: the project being worked on, its scanned files and the
files open in the editor. Shared by the chat REPL and the web API.
"""

import os
import threading

from .config import EDIT_KEYWORDS
from .models import ScannedFile
from .prompts import (
    build_chat_prompt, build_chat_debug_prompt, build_chat_concept_prompt,
    build_chat_feature_prompt, build_project_chat_prompt, build_edit_prompt,
    build_file_question_prompt, build_file_suggest_prompt
)
from .repo_scanner import scan_repository
from .response_parser import strip_code_fences
from .utils import read_text_file, write_text_file


def is_edit_request(prompt):
    """True when the request asks to change code rather than ask about it."""
    lowered = prompt.lower()
    return any(keyword in lowered for keyword in EDIT_KEYWORDS)


class AgentSession:
    """
    One user's working state.

    Attributes:
        project_path (str): Root of the project.
        client: Model client used for every query.
        files (list[ScannedFile]): Files loaded from the project.
        open_files (dict): Absolute path -> content for files open in the editor.
    """

    def __init__(self, client, project_path=None, config=None):
        self.client = client
        self.project_path = os.path.abspath(project_path or os.getcwd())
        self.config = config or {}
        self.files = []
        self.open_files = {}

    # -------------------------------------------------------------------------
    # Project and files
    # -------------------------------------------------------------------------

    def load_project(self, project_path=None, verbose=True):
        if project_path:
            self.project_path = os.path.abspath(project_path)
        self.files = scan_repository(self.project_path, config=self.config, verbose=verbose)
        return self.files

    def open_file(self, file_path):
        """
        Read a file into the editor.

        Raises:
            FileNotFoundError: If the file does not exist.
        """
        path = os.path.abspath(file_path)
        if not os.path.isfile(path):
            raise FileNotFoundError("File not found")

        content = read_text_file(path)
        self.open_files[path] = content
        return ScannedFile.from_path(path, content)

    def save_file(self, file_path, content):
        path = os.path.abspath(file_path)
        write_text_file(path, content)
        self.open_files[path] = content

    def _content_for(self, file_path, content=None):
        if content is not None:
            return content
        path = os.path.abspath(file_path)
        if path not in self.open_files:
            self.open_file(path)
        return self.open_files[path]

    # -------------------------------------------------------------------------
    # Model conversations
    # -------------------------------------------------------------------------

    def chat(self, message):
        return self.client.query(build_chat_prompt(message, self.files))

    def chat_debug(self, error):
        return self.client.query(build_chat_debug_prompt(error, self.files))

    def chat_concept(self):
        return self.client.query(build_chat_concept_prompt(self.files))

    def chat_feature(self, request):
        return self.client.query(build_chat_feature_prompt(request, self.files))

    def ask(self, message, project_path=None):
        """Answer a free-form question with only the project path as context."""
        return self.client.query(build_project_chat_prompt(message, project_path or self.project_path))

    def edit_with_ai(self, prompt, file_path, content=None):
        """
        Apply a request to a file, or answer a question about it.

        Edit requests return the model's replacement code under `new_content`
        (fences stripped, nothing written to disk); questions return the
        model's answer under `response`.
        """
        file_name = os.path.basename(file_path)
        content = self._content_for(file_path, content)

        if is_edit_request(prompt):
            new_content = self.client.query(build_edit_prompt(file_name, content, prompt))
            return {
                'new_content': strip_code_fences(new_content),
                'message': f'Modified {file_name} based on: "{prompt}"'
            }

        response = self.client.query(build_file_question_prompt(file_name, content, prompt))
        return {'response': response}

    def suggest_for_file(self, file_path, instruction, content=None):
        content = self._content_for(file_path, content)
        return self.client.query(build_file_suggest_prompt(os.path.basename(file_path), content, instruction))


class SessionStore:
    """Sessions keyed by id, created on first use."""

    def __init__(self, client, config=None):
        self.client = client
        self.config = config or {}
        self._sessions = {}
        self._lock = threading.Lock()

    # Sessions are never evicted; the server is meant for one local user
    def get(self, session_id="default"):
        with self._lock:
            if session_id not in self._sessions:
                self._sessions[session_id] = AgentSession(self.client, config=self.config)
            return self._sessions[session_id]

    def __len__(self):
        return len(self._sessions)
