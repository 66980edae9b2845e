#!/usr/bin/env python3
"""
Tests for prompt rendering and for cleaning up model replies.
"""

import unittest
import os
import sys

sys.path.insert(0, os.path.dirname(__file__))

import fake_client  # noqa: F401
from code_agent.models import ScannedFile, ProblemInput
from code_agent.prompts import (
    code_context, file_names, build_debug_prompt, build_concept_prompt,
    build_feature_prompt, build_bug_analysis_prompt, build_fix_suggestion_prompt,
    build_file_issues_prompt, build_chat_prompt, build_edit_prompt,
    build_file_question_prompt, build_project_chat_prompt
)
from code_agent.response_parser import strip_code_fences, parse_json_response, extract_json_array
from code_agent.result_factory import create_bug_analysis


def make_files(count, content="x" * 1000):
    return [ScannedFile.from_path(f"/project/src/file{i}.ts", content) for i in range(count)]


class TestCodeContext(unittest.TestCase):

    def test_never_more_than_five_files(self):
        files = make_files(9)

        rendered = code_context(files, count=50)

        self.assertEqual(rendered.count("--- file"), 5)

    def test_truncation_and_headers(self):
        files = make_files(2, content="abcdefghij")

        rendered = code_context(files, chars=4)

        self.assertEqual(rendered, "--- file0.ts ---\nabcd...\n\n--- file1.ts ---\nabcd...")
        self.assertIn("--- /project/src/file0.ts ---", code_context(files, full_path=True))

    def test_file_names(self):
        self.assertEqual(file_names(make_files(3)), "file0.ts, file1.ts, file2.ts")
        self.assertEqual(file_names(make_files(3), count=1), "file0.ts")


class TestModePrompts(unittest.TestCase):

    def test_prompts_carry_at_most_five_files(self):
        files = make_files(12)
        problem = ProblemInput(description="crash", base_path="/project")
        analysis = create_bug_analysis("b", "r", ["file0.ts"], "high", "s")

        prompts = [
            build_debug_prompt("TypeError", files),
            build_concept_prompt(files),
            build_feature_prompt("add login", files),
            build_bug_analysis_prompt(problem, files),
            build_fix_suggestion_prompt(analysis, files),
            build_chat_prompt("what is this?", files),
        ]

        for prompt in prompts:
            with self.subTest(prompt=prompt[:40]):
                self.assertLessEqual(prompt.count("\n--- "), 5)

    def test_debug_prompt_contents(self):
        prompt = build_debug_prompt("TypeError: x is undefined", make_files(2, content="const x = y.z;"))

        self.assertIn("TypeError: x is undefined", prompt)
        self.assertIn("## Related Code (2 files)", prompt)
        self.assertIn("--- file1.ts ---\nconst x = y.z;", prompt)
        self.assertIn('"errorMeaning"', prompt)

    def test_concept_prompt_lists_every_file_but_samples_five(self):
        prompt = build_concept_prompt(make_files(7))

        self.assertIn("file6.ts", prompt.split("## Code Samples")[0])
        self.assertNotIn("--- file5.ts ---", prompt)

    def test_bug_analysis_without_error_log(self):
        prompt = build_bug_analysis_prompt(ProblemInput(description="login fails", base_path="/p"), make_files(1))

        self.assertIn("No error log provided", prompt)
        self.assertIn("--- /project/src/file0.ts ---", prompt)

    def test_file_issue_prompt_truncates(self):
        prompt = build_file_issues_prompt("/p/big.ts", "y" * 5000)

        self.assertIn("y" * 2000, prompt)
        self.assertNotIn("y" * 2001, prompt)

    def test_edit_and_question_prompts(self):
        edit = build_edit_prompt("app.ts", "let a = 1;", "rename a to b")
        question = build_file_question_prompt("app.ts", "z" * 1500, "what is z?")

        self.assertIn("User Request: rename a to b", edit)
        self.assertIn("Return ONLY the complete modified code", edit)
        self.assertIn("z" * 1000 + "...", question)
        self.assertNotIn("z" * 1001, question)

    def test_project_chat_prompt(self):
        self.assertIn("Project: Unknown", build_project_chat_prompt("hi"))
        self.assertIn("Project: /work/app", build_project_chat_prompt("hi", "/work/app"))


class TestResponseParsing(unittest.TestCase):

    def test_strip_code_fences(self):
        self.assertEqual(strip_code_fences('```json\n{"a": 1}\n```'), '{"a": 1}')
        self.assertEqual(strip_code_fences('```\ncode\n```'), 'code')
        self.assertEqual(strip_code_fences('```ts\nconst a = 1;'), 'const a = 1;')
        self.assertEqual(strip_code_fences('  plain text  '), 'plain text')

    def test_parse_json_response(self):
        self.assertEqual(parse_json_response('```json\n{"file": "a.ts"}\n```'), {"file": "a.ts"})
        self.assertIsNone(parse_json_response("The bug is in a.ts"))

    def test_extract_json_array(self):
        self.assertEqual(extract_json_array('[{"issue": "x"}]'), [{"issue": "x"}])
        self.assertEqual(
            extract_json_array('Here are the issues:\n[{"issue": "x"}]\nHope that helps.'),
            [{"issue": "x"}]
        )
        self.assertEqual(extract_json_array("No issues found."), [])
        self.assertEqual(extract_json_array('{"issue": "x"}'), [])
        self.assertEqual(extract_json_array("[not json]"), [])


if __name__ == '__main__':
    unittest.main()
