"""
Model clients - a local Ollama server by default, Google Gemini optionally.

Everything else in the agent talks to a model through `query()` and
`health_check()`, so tests can hand in a fake client.
"""

import os

import httpx
from dotenv import load_dotenv

from .config import (
    RED, RESET, GREY,
    get_configured_model_backend, get_configured_ollama_host, get_configured_ollama_model,
    get_configured_gemini_model, get_configured_model_timeout
)
from .knowledge import detect_from_file, detect_from_content, get_enhanced_prompt, get_domain

# Optional dependencies
try:
    import google.generativeai as genai
    HAS_GENAI = True
except ImportError:
    HAS_GENAI = False


class ModelQueryError(RuntimeError):
    """Raised when the model backend cannot answer."""


SYSTEM_PROMPT = """You are a senior full-stack and graphics engineer.

Your role:
- Act as a personal AI development agent.
- Help understand existing code deeply.
- Debug issues by finding the root cause.
- Design and add new features step by step.

Domains you support:
- WebGL, WebGPU, WGSL
- HTML, CSS, JavaScript
- React, Angular, Vue
- Tailwind CSS
- TypeScript, Node.js

Rules (VERY IMPORTANT):
1. Do NOT jump to writing code immediately.
2. First explain the concept and reasoning.
3. If the request is unclear, ask clarifying questions.
4. When adding a feature:
   - Explain architecture
   - List files to change
   - Then give minimal skeleton code
5. When debugging:
   - Explain what the error means
   - Trace where it likely comes from
   - Suggest a fix with reasoning
6. Prefer simple, maintainable solutions.
7. Assume the user is a developer, not a beginner.
8. Use only the given code/context. Do not guess.

Output format:
- Explanation
- Plan
- Then code (only if needed)

If something is not possible or not practical, say it honestly."""

# =============================================================================
# CLIENTS
# =============================================================================

class ModelClient:
    """Interface every model backend implements."""

    name = "model"

    def query(self, prompt, system_prompt=None):
        """Send one prompt and return the model's text reply."""
        raise NotImplementedError

    def health_check(self):
        """Return True when the backend is reachable."""
        raise NotImplementedError

    def build_messages(self, prompt, system_prompt=None):
        return [
            {"role": "system", "content": system_prompt or SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ]


class OllamaClient(ModelClient):
    """Client for a locally running Ollama server."""

    name = "Ollama"

    def __init__(self, host, model, timeout=300.0, http_client=None):
        self.host = host.rstrip("/")
        self.model = model
        self.http = http_client or httpx.Client(
            base_url=self.host,
            timeout=httpx.Timeout(timeout, connect=5.0),
        )

    def query(self, prompt, system_prompt=None):
        print(f"{GREY}🤖 Querying Ollama ({self.model})...{RESET}")
        payload = {
            "model": self.model,
            "messages": self.build_messages(prompt, system_prompt),
            "stream": False,
        }
        try:
            response = self.http.post("/api/chat", json=payload)
            response.raise_for_status()
            return response.json()["message"]["content"]
        except (httpx.HTTPError, KeyError, ValueError) as e:
            print(f"{RED}✖ Ollama error: {e}{RESET}")
            raise ModelQueryError("Failed to query Ollama. Make sure Ollama is running.") from e

    def health_check(self):
        try:
            response = self.http.get("/api/tags")
            return response.status_code == 200
        except httpx.HTTPError:
            return False

    def list_models(self):
        """Names of the models installed on the Ollama server."""
        try:
            response = self.http.get("/api/tags")
            response.raise_for_status()
            return [m.get("name") for m in response.json().get("models", [])]
        except (httpx.HTTPError, ValueError) as e:
            raise ModelQueryError("Failed to list Ollama models. Make sure Ollama is running.") from e


class GeminiClient(ModelClient):
    """Client for the Google Gemini API."""

    name = "Gemini"

    def __init__(self, model):
        self.model = model
        self.configured = False

    def configure(self):
        """Configure the Gemini client with API key."""
        if not HAS_GENAI:
            raise ModelQueryError(
                "google-generativeai package not installed. Install with 'pip install google-generativeai'."
            )
        load_dotenv()
        api_key = os.getenv("GOOGLE_API_KEY")
        if not api_key:
            raise ModelQueryError("GOOGLE_API_KEY not found in environment variables or .env file.")
        genai.configure(api_key=api_key)
        self.configured = True

    def query(self, prompt, system_prompt=None):
        if not self.configured:
            self.configure()

        print(f"{GREY}🤖 Querying Gemini ({self.model})...{RESET}")
        # Gemini takes a single prompt; fold the system message in front
        full_prompt = "\n".join(m["content"] for m in self.build_messages(prompt, system_prompt))
        generation_config = {
            "temperature": 0.2,
            "top_p": 0.8,
            "top_k": 20,
        }
        try:
            model = genai.GenerativeModel(self.model)
            response = model.generate_content(full_prompt, generation_config=generation_config)
            return response.text
        except Exception as e:
            print(f"{RED}✖ Gemini error: {e}{RESET}")
            raise ModelQueryError(f"Error calling Google Gemini API: {e}") from e

    def health_check(self):
        try:
            if not self.configured:
                self.configure()
            return True
        except ModelQueryError as e:
            print(f"{RED}✖ {e}{RESET}")
            return False


def create_client(config=None):
    """Build the model client selected by the configuration."""
    config = config or {}
    backend = get_configured_model_backend(config)

    if backend == "gemini":
        return GeminiClient(get_configured_gemini_model(config))
    if backend != "ollama":
        raise ValueError(f"Unknown model backend: {backend}")

    return OllamaClient(
        get_configured_ollama_host(config),
        get_configured_ollama_model(config),
        timeout=get_configured_model_timeout(config),
    )

# =============================================================================
# DOMAIN-AWARE QUERY
# =============================================================================

def query_with_domain(client, prompt, file_path=None, file_content=None, knowledge_dir=None):
    """
    Query with an expert system prompt picked from the file's technology domain.

    Returns:
        tuple[str, str]: The reply and the detected domain key.
    """
    domain = "generic"

    if file_path and file_content:
        detection = detect_from_file(file_path, file_content)
        domain = detection['domain']
        print(f"{GREY}   📌 Detected: {get_domain(domain)['name']} ({detection['confidence'] * 100:.0f}%){RESET}")
    elif file_content:
        detection = detect_from_content(file_content)
        domain = detection['domain']
        print(f"{GREY}   📌 Detected: {get_domain(domain)['name']}{RESET}")

    system_prompt = get_enhanced_prompt(domain, prompt, knowledge_dir=knowledge_dir)
    return client.query(prompt, system_prompt), domain
