#!/usr/bin/env python3
"""
Tests for the web API using FastAPI's TestClient and a fake model client.
"""

import unittest
import tempfile
import shutil
import json
import os
import sys

from fastapi.testclient import TestClient

sys.path.insert(0, os.path.dirname(__file__))

from fake_client import FakeClient, write_project
from code_agent.web_server import create_app


class ApiTestCase(unittest.TestCase):

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        write_project(self.temp_dir, {
            "src/login.ts": "export function loginHandler(user) { return user.name; }",
            "src/utils.ts": "export const maybe = undefined;",
        })
        self.model = FakeClient()
        self.api = TestClient(create_app(client=self.model))

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)


class TestProjectRoutes(ApiTestCase):

    def test_health(self):
        data = self.api.get("/api/health").json()

        self.assertEqual(data['status'], "ok")
        self.assertTrue(data['model'])
        self.assertEqual(data['message'], "Connected")

    def test_health_when_model_down(self):
        api = TestClient(create_app(client=FakeClient(healthy=False)))

        data = api.get("/api/health").json()

        self.assertFalse(data['model'])
        self.assertEqual(data['message'], "FakeModel not running")

    def test_scan(self):
        data = self.api.post("/api/scan", json={"path": self.temp_dir}).json()

        self.assertTrue(data['success'])
        self.assertEqual([f['name'] for f in data['files']], ["login.ts", "utils.ts"])
        self.assertEqual(data['files'][0]['lines'], 1)
        self.assertNotIn('content', data['files'][0])

    def test_debug(self):
        self.model.replies = [json.dumps({"errorMeaning": "user is undefined", "file": "login.ts"})]

        data = self.api.post("/api/debug", json={
            "error": "TypeError: login handler crash",
            "projectPath": self.temp_dir,
        }).json()

        self.assertTrue(data['success'])
        self.assertEqual(data['result']['file'], "login.ts")

    def test_concept_and_feature(self):
        self.model.replies = ["It logs people in.", "Add a logout handler."]

        concept = self.api.post("/api/concept", json={"projectPath": self.temp_dir}).json()
        feature = self.api.post("/api/feature", json={"request": "logout", "projectPath": self.temp_dir}).json()

        self.assertEqual(concept['result']['architecture'], "It logs people in.")
        self.assertEqual(feature['result']['approach'], "Add a logout handler.")

    def test_concept_on_empty_project_reports_error(self):
        empty = os.path.join(self.temp_dir, "empty")
        os.makedirs(empty)

        data = self.api.post("/api/concept", json={"projectPath": empty}).json()

        self.assertFalse(data['success'])
        self.assertIn("No code files found", data['error'])

    def test_analyze_project(self):
        self.model.replies = ['[{"severity": "error", "issue": "x", "suggestion": "y"}]', "[]"]

        data = self.api.post("/api/analyze/project", json={"path": self.temp_dir}).json()

        self.assertTrue(data['success'])
        self.assertEqual(data['result']['summary'], "Analyzed 2/2 files. Found 1 errors, 0 warnings.")

    def test_bug_analysis_loop(self):
        self.model.replies = ["broken", "fix it"]

        data = self.api.post("/api/analyze", json={
            "description": "login crash", "projectPath": self.temp_dir,
        }).json()

        self.assertTrue(data['success'])
        self.assertEqual(data['result']['analysis']['bug_explanation'], "broken")
        self.assertEqual(data['result']['fixes'][0]['explanation'], "fix it")

    def test_model_failure_reports_error(self):
        api = TestClient(create_app(client=FakeClient(fail=True)))

        data = api.post("/api/chat", json={"message": "hi"}).json()

        self.assertEqual(data, {"success": False, "error": "Failed to query FakeModel."})


class TestChatAndFileRoutes(ApiTestCase):

    def test_chat(self):
        self.model.replies = ["Hello!"]

        data = self.api.post("/api/chat", json={"message": "hi", "projectPath": "/work/app"}).json()

        self.assertEqual(data, {"success": True, "response": "Hello!"})
        self.assertIn("Project: /work/app", self.model.prompts[0])

    def test_chat_edit_and_question(self):
        path = os.path.join(self.temp_dir, "src", "utils.ts")
        self.model.replies = ["```\nexport const maybe = null;\n```", "It exports maybe."]

        edit = self.api.post("/api/chat/edit", json={
            "prompt": "change undefined to null", "filePath": path, "content": "export const maybe = undefined;",
        }).json()
        question = self.api.post("/api/chat/edit", json={
            "prompt": "what does this export?", "filePath": path,
        }).json()

        self.assertEqual(edit['newContent'], "export const maybe = null;")
        self.assertEqual(edit['message'], 'Modified utils.ts based on: "change undefined to null"')
        self.assertEqual(question, {"success": True, "response": "It exports maybe."})

    def test_file_read_write(self):
        path = os.path.join(self.temp_dir, "src", "new.ts")

        written = self.api.post("/api/file/write", json={"filePath": path, "content": "a\nb"}).json()
        read = self.api.post("/api/file/read", json={"filePath": path}).json()

        self.assertEqual(written, {"success": True, "message": "File saved!"})
        self.assertTrue(read['success'])
        self.assertEqual(read['content'], "a\nb")
        self.assertEqual(read['name'], "new.ts")
        self.assertEqual(read['extension'], ".ts")
        self.assertEqual(read['lines'], 2)

    def test_file_read_missing(self):
        data = self.api.post("/api/file/read", json={"filePath": os.path.join(self.temp_dir, "nope.ts")}).json()

        self.assertEqual(data, {"success": False, "error": "File not found"})

    def test_file_suggest(self):
        self.model.replies = ["export const maybe = null;"]

        data = self.api.post("/api/file/suggest", json={
            "filePath": "/x/utils.ts", "content": "export const maybe = undefined;", "instruction": "avoid undefined",
        }).json()

        self.assertEqual(data, {"success": True, "suggestion": "export const maybe = null;"})

    def test_sessions_are_kept_apart(self):
        self.api.post("/api/scan", json={"path": self.temp_dir}, headers={"X-Session-Id": "one"})

        sessions = self.api.app.state.sessions
        self.assertEqual(len(sessions.get("one").files), 2)
        self.assertEqual(sessions.get("two").files, [])

    def test_invalid_body(self):
        response = self.api.post("/api/debug", json={"projectPath": self.temp_dir})
        self.assertEqual(response.status_code, 422)


if __name__ == '__main__':
    unittest.main()
