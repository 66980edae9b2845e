#!/usr/bin/env python3
"""
Tests for the model clients, using httpx's mock transport in place of a
running Ollama server.
"""

import unittest
import json
import os
import sys
from unittest.mock import patch

import httpx

sys.path.insert(0, os.path.dirname(__file__))

from fake_client import FakeClient
from code_agent.llm_client import (
    OllamaClient, GeminiClient, ModelQueryError, SYSTEM_PROMPT,
    create_client, query_with_domain
)
from code_agent.knowledge import get_domain


def ollama_with(handler):
    http = httpx.Client(base_url="http://ollama.test", transport=httpx.MockTransport(handler))
    return OllamaClient("http://ollama.test", "test-model", http_client=http)


class TestOllamaClient(unittest.TestCase):
    """Test the Ollama REST client."""

    def test_query_posts_chat_request(self):
        seen = {}

        def handler(request):
            seen['path'] = request.url.path
            seen['body'] = json.loads(request.content)
            return httpx.Response(200, json={"message": {"role": "assistant", "content": "hello"}})

        client = ollama_with(handler)
        reply = client.query("What does this do?")

        self.assertEqual(reply, "hello")
        self.assertEqual(seen['path'], "/api/chat")
        self.assertEqual(seen['body']['model'], "test-model")
        self.assertFalse(seen['body']['stream'])
        self.assertEqual(seen['body']['messages'], [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": "What does this do?"},
        ])

    def test_custom_system_prompt(self):
        seen = {}

        def handler(request):
            seen['body'] = json.loads(request.content)
            return httpx.Response(200, json={"message": {"content": "ok"}})

        ollama_with(handler).query("q", system_prompt="You are a shader expert.")

        self.assertEqual(seen['body']['messages'][0]['content'], "You are a shader expert.")

    def test_http_error_becomes_model_query_error(self):
        client = ollama_with(lambda request: httpx.Response(500, text="boom"))

        with self.assertRaises(ModelQueryError) as ctx:
            client.query("q")
        self.assertIn("Make sure Ollama is running", str(ctx.exception))

    def test_connection_error_becomes_model_query_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with self.assertRaises(ModelQueryError):
            ollama_with(handler).query("q")

    def test_malformed_reply_becomes_model_query_error(self):
        client = ollama_with(lambda request: httpx.Response(200, json={"unexpected": True}))

        with self.assertRaises(ModelQueryError):
            client.query("q")

    def test_health_check(self):
        def handler(request):
            if request.url.path == "/api/tags":
                return httpx.Response(200, json={"models": [{"name": "test-model"}]})
            return httpx.Response(404)

        client = ollama_with(handler)

        self.assertTrue(client.health_check())
        self.assertEqual(client.list_models(), ["test-model"])

    def test_health_check_when_down(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        self.assertFalse(ollama_with(handler).health_check())


class TestClientFactory(unittest.TestCase):

    def test_default_backend_is_ollama(self):
        client = create_client({})

        self.assertIsInstance(client, OllamaClient)
        self.assertEqual(client.model, "deepseek-coder:6.7b")
        self.assertEqual(client.host, "http://localhost:11434")

    def test_configured_backends(self):
        ollama = create_client({"ollama_host": "http://gpu-box:11434/", "ollama_model": "codellama"})
        self.assertEqual(ollama.host, "http://gpu-box:11434")
        self.assertEqual(ollama.model, "codellama")

        gemini = create_client({"model_backend": "gemini", "gemini_model": "gemini-pro"})
        self.assertIsInstance(gemini, GeminiClient)
        self.assertEqual(gemini.model, "gemini-pro")

    def test_unknown_backend(self):
        with self.assertRaises(ValueError):
            create_client({"model_backend": "mystery"})


class TestGeminiClient(unittest.TestCase):

    @patch.dict(os.environ, {}, clear=True)
    @patch("code_agent.llm_client.load_dotenv")
    def test_missing_api_key(self, _load_dotenv):
        client = GeminiClient("gemini-1.5-flash")

        with self.assertRaises(ModelQueryError):
            client.configure()
        self.assertFalse(client.health_check())


class TestDomainQuery(unittest.TestCase):
    """Test that the system prompt follows the detected domain."""

    def test_file_domain_selects_system_prompt(self):
        client = FakeClient(replies=["[]"])

        reply, domain = query_with_domain(client, "Find issues", file_path="shader.wgsl", file_content="@vertex fn main() {}")

        self.assertEqual(reply, "[]")
        self.assertEqual(domain, "webgpu")
        self.assertTrue(client.system_prompts[0].startswith(get_domain("webgpu")['prompt']))

    def test_content_only_and_no_context(self):
        client = FakeClient(replies=["a", "b"])

        _, domain = query_with_domain(client, "q", file_content="const [a, setA] = useState(0); useEffect(() => {});")
        self.assertEqual(domain, "react")

        _, domain = query_with_domain(client, "q")
        self.assertEqual(domain, "generic")
        self.assertEqual(client.system_prompts[1], get_domain("generic")['prompt'])


if __name__ == '__main__':
    unittest.main()
