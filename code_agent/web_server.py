"""FastAPI server exposing the agent modes and the file editor to a local web UI."""

import os
import json
from typing import List, Optional

import uvicorn
from fastapi import FastAPI, Header, Request
from pydantic import BaseModel, ConfigDict, Field

from .bug_analysis import run_agent_with_input
from .config import BOLD, RESET, DOUBLE_RULE
from .file_selector import NoFilesFoundError
from .llm_client import ModelQueryError, create_client
from .modes import debug, concept, feature
from .project_analysis import analyze_project
from .report_generators import format_json
from .session import SessionStore

DEFAULT_PORT = 3000

# Failures reported to the UI as {success: false, error}
HANDLED_ERRORS = (ModelQueryError, NoFilesFoundError, OSError, UnicodeDecodeError, ValueError)


class ApiModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class PathRequest(ApiModel):
    path: Optional[str] = None


class ProjectRequest(ApiModel):
    project_path: Optional[str] = Field(default=None, alias="projectPath")


class DebugRequest(ProjectRequest):
    error: str
    files: Optional[List[str]] = None


class FeatureRequest(ProjectRequest):
    request: str


class AnalyzeRequest(ProjectRequest):
    description: str
    files: Optional[List[str]] = None


class ChatRequest(ProjectRequest):
    message: str


class ChatEditRequest(ProjectRequest):
    prompt: str
    file_path: str = Field(alias="filePath")
    content: Optional[str] = None


class FileReadRequest(ApiModel):
    file_path: str = Field(alias="filePath")


class FileWriteRequest(ApiModel):
    file_path: str = Field(alias="filePath")
    content: str


class FileSuggestRequest(ApiModel):
    file_path: str = Field(alias="filePath")
    instruction: str
    content: Optional[str] = None


def _failure(error):
    return {"success": False, "error": str(error)}

def _serializable(result):
    return json.loads(format_json(result))


def create_app(client=None, config=None):
    """
    Build the API application.

    Args:
        client: Model client; built from the configuration when omitted.
        config (dict, optional): Agent configuration.
    """
    config = config or {}
    client = client or create_client(config)

    app = FastAPI(title="local-code-agent", version="0.1.0")
    app.state.client = client
    app.state.config = config
    app.state.sessions = SessionStore(client, config)

    def get_session(request: Request, session_id: Optional[str]):
        return request.app.state.sessions.get(session_id or "default")

    @app.get("/api/health")
    def health():
        ok = client.health_check()
        return {
            "status": "ok",
            "model": ok,
            "backend": client.name,
            "message": "Connected" if ok else f"{client.name} not running",
        }

    @app.post("/api/scan")
    def scan(body: PathRequest, request: Request, x_session_id: Optional[str] = Header(default=None)):
        session = get_session(request, x_session_id)
        try:
            files = session.load_project(body.path or os.getcwd(), verbose=False)
        except HANDLED_ERRORS as e:
            return _failure(e)
        return {"success": True, "files": [f.to_dict(include_content=False) for f in files]}

    @app.post("/api/analyze/project")
    def analyze_project_route(body: PathRequest):
        try:
            result = analyze_project(client, body.path or os.getcwd(), config=config)
        except HANDLED_ERRORS as e:
            return _failure(e)
        return {"success": True, "result": result}

    @app.post("/api/analyze")
    def analyze_bug(body: AnalyzeRequest):
        try:
            result = run_agent_with_input(
                client, body.description, file_paths=body.files,
                base_path=body.project_path, config=config
            )
        except HANDLED_ERRORS as e:
            return _failure(e)
        return {"success": True, "result": _serializable(result)}

    @app.post("/api/debug")
    def debug_route(body: DebugRequest):
        try:
            result = debug(client, body.error, base_path=body.project_path, file_paths=body.files, config=config)
        except HANDLED_ERRORS as e:
            return _failure(e)
        return {"success": True, "result": result}

    @app.post("/api/concept")
    def concept_route(body: ProjectRequest):
        try:
            result = concept(client, body.project_path, config=config)
        except HANDLED_ERRORS as e:
            return _failure(e)
        return {"success": True, "result": result}

    @app.post("/api/feature")
    def feature_route(body: FeatureRequest):
        try:
            result = feature(client, body.request, body.project_path, config=config)
        except HANDLED_ERRORS as e:
            return _failure(e)
        return {"success": True, "result": result}

    @app.post("/api/chat")
    def chat(body: ChatRequest, request: Request, x_session_id: Optional[str] = Header(default=None)):
        session = get_session(request, x_session_id)
        try:
            response = session.ask(body.message, project_path=body.project_path)
        except HANDLED_ERRORS as e:
            return _failure(e)
        return {"success": True, "response": response}

    @app.post("/api/chat/edit")
    def chat_edit(body: ChatEditRequest, request: Request, x_session_id: Optional[str] = Header(default=None)):
        session = get_session(request, x_session_id)
        try:
            result = session.edit_with_ai(body.prompt, body.file_path, content=body.content)
        except HANDLED_ERRORS as e:
            return _failure(e)

        if "new_content" in result:
            return {"success": True, "newContent": result["new_content"], "message": result["message"]}
        return {"success": True, "response": result["response"]}

    @app.post("/api/file/read")
    def file_read(body: FileReadRequest, request: Request, x_session_id: Optional[str] = Header(default=None)):
        session = get_session(request, x_session_id)
        try:
            opened = session.open_file(body.file_path)
        except HANDLED_ERRORS as e:
            return _failure(e)
        return {"success": True, **opened.to_dict()}

    @app.post("/api/file/write")
    def file_write(body: FileWriteRequest, request: Request, x_session_id: Optional[str] = Header(default=None)):
        session = get_session(request, x_session_id)
        try:
            session.save_file(body.file_path, body.content)
        except HANDLED_ERRORS as e:
            return _failure(e)
        return {"success": True, "message": "File saved!"}

    @app.post("/api/file/suggest")
    def file_suggest(body: FileSuggestRequest, request: Request, x_session_id: Optional[str] = Header(default=None)):
        session = get_session(request, x_session_id)
        try:
            suggestion = session.suggest_for_file(body.file_path, body.instruction, content=body.content)
        except HANDLED_ERRORS as e:
            return _failure(e)
        return {"success": True, "suggestion": suggestion}

    return app


def serve(client=None, config=None, host="127.0.0.1", port=DEFAULT_PORT):
    """Run the API with uvicorn until interrupted."""
    app = create_app(client, config)
    print(f"\n{BOLD}🚀 AI Agent Web API{RESET}")
    print(DOUBLE_RULE)
    print(f"🌐 Open: http://localhost:{port}")
    print(DOUBLE_RULE)
    uvicorn.run(app, host=host, port=port)
