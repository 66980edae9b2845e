#!/usr/bin/env python3
"""
Test runner for the Local Code Agent.

Runs every suite in tests/ and prints a per-suite breakdown.
Usage: python tests/run_all_tests.py [suite ...]
"""

import sys
import os
import time
import unittest

TESTS_DIR = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, TESTS_DIR)
sys.path.insert(0, os.path.dirname(TESTS_DIR))

from code_agent.config import BOLD, RESET, GREEN, RED, YELLOW, GREY

SUITES = [
    'test_repo_scanner',
    'test_dependency_analysis',
    'test_file_selector',
    'test_knowledge',
    'test_prompts_and_parsing',
    'test_llm_client',
    'test_modes',
    'test_session',
    'test_web_server',
    'test_cli',
]


def run_suite(name):
    suite = unittest.defaultTestLoader.loadTestsFromName(name)
    with open(os.devnull, "w") as devnull:
        return unittest.TextTestRunner(stream=devnull, verbosity=0).run(suite)

def main(argv=None):
    names = (argv if argv is not None else sys.argv[1:]) or SUITES
    start = time.time()
    results = []

    print(f"\n{BOLD}Local Code Agent Test Suites{RESET}")
    print("=" * 60)

    for name in names:
        result = run_suite(name)
        results.append((name, result))
        status = f"{GREEN}PASS{RESET}" if result.wasSuccessful() else f"{RED}FAIL{RESET}"
        print(f"  {status} {name}: {result.testsRun} tests")
        if result.skipped:
            print(f"      {YELLOW}Skipped: {len(result.skipped)}{RESET}")

    failures = [(name, test, tb) for name, r in results for test, tb in r.failures + r.errors]
    for name, test, traceback in failures:
        print(f"\n{RED}FAILURE in {name}:{RESET} {test}")
        print(f"{GREY}{traceback[:500]}{'...' if len(traceback) > 500 else ''}{RESET}")

    total = sum(r.testsRun for _, r in results)
    print(f"\n{BOLD}Total:{RESET} {total} tests, {len(failures)} failed, {time.time() - start:.2f}s")
    return 0 if not failures else 1


if __name__ == '__main__':
    sys.exit(main())
