"""
Bug analysis agent loop.

Flow:
    1. Read problem (arguments or interactive prompts)
    2. Find related files (relevance cascade)
    3. Analyze logic and explain the bug
    4. Suggest fixes
"""

import os

from .config import BOLD, RESET, GREY, GREEN, RED, DOUBLE_RULE
from .file_selector import select_relevant_files
from .llm_client import ModelQueryError
from .models import ProblemInput
from .prompts import build_bug_analysis_prompt, build_fix_suggestion_prompt
from .response_parser import parse_json_response
from .result_factory import create_bug_analysis, create_fix_suggestion

# =============================================================================
# STEP 1: READ PROBLEM
# =============================================================================

def read_problem_interactive(input_func=input):
    """Ask for the problem on stdin."""
    print(f"\n{BOLD}🐛 AI Bug Analyzer{RESET}")
    print(DOUBLE_RULE)

    description = input_func("\n📝 Describe the bug/error:\n> ").strip()
    error_log = input_func("\n📋 Paste error log (or press Enter to skip):\n> ").strip() or None

    files_answer = input_func("\n📂 Related files (comma-separated, or Enter to auto-detect):\n> ").strip()
    file_paths = [f.strip() for f in files_answer.split(",") if f.strip()] if files_answer else None

    base_path = input_func("\n📁 Project path (Enter for current dir):\n> ").strip() or os.getcwd()

    return ProblemInput(
        description=description,
        error_log=error_log,
        file_paths=file_paths,
        base_path=base_path
    )

# =============================================================================
# STEP 3: ANALYZE + EXPLAIN
# =============================================================================

def analyze_bug_logic(client, problem, files):
    """Ask the model for a structured explanation of the bug."""
    print(f"\n{BOLD}🧠 Analyzing bug logic...{RESET}")

    response = client.query(build_bug_analysis_prompt(problem, files))
    parsed = parse_json_response(response)
    file_paths = [f.path for f in files]

    if not isinstance(parsed, dict):
        return create_bug_analysis(
            bug_explanation=response,
            root_cause='See explanation above',
            affected_code=file_paths,
            severity='medium',
            summary=problem.description
        )

    return create_bug_analysis(
        bug_explanation=parsed.get('bugExplanation') or response,
        root_cause=parsed.get('rootCause') or 'Unable to determine root cause',
        affected_code=parsed.get('affectedCode') or file_paths,
        severity=parsed.get('severity') or 'medium',
        summary=parsed.get('summary') or problem.description
    )

# =============================================================================
# STEP 4: SUGGEST FIX
# =============================================================================

def suggest_fix(client, analysis, files):
    """Ask the model for concrete fixes; falls back to one suggestion holding the raw reply."""
    print(f"\n{BOLD}🔧 Generating fix suggestions...{RESET}")

    response = client.query(build_fix_suggestion_prompt(analysis, files))

    parsed = parse_json_response(response)

    if isinstance(parsed, list):
        return [
            create_fix_suggestion(
                file=fix.get('file') or 'unknown',
                description=fix.get('description') or 'See explanation',
                current_code=fix.get('currentCode'),
                suggested_code=fix.get('suggestedCode'),
                explanation=fix.get('explanation') or fix.get('description') or '',
                priority=fix.get('priority') or 'medium'
            )
            for fix in parsed
            if isinstance(fix, dict)
        ]

    return [create_fix_suggestion(
        file=analysis['affected_code'][0] if analysis['affected_code'] else 'unknown',
        description='AI Generated Fix',
        explanation=response,
        priority='medium'
    )]

# =============================================================================
# AGENT LOOP
# =============================================================================

def run_agent_loop(client, problem=None, config=None, input_func=input):
    """
    Run the full bug analysis loop.

    Args:
        client: Model client.
        problem (ProblemInput, optional): Asked for interactively when omitted.

    Returns:
        dict: problem, files, analysis and fixes.

    Raises:
        ModelQueryError: If the model is not reachable.
        NoFilesFoundError: If no file could be selected.
    """
    print(f"\n{BOLD}🤖 AI Bug Analyzer Agent{RESET}")
    print(DOUBLE_RULE)

    print(f"\n🔌 Checking {client.name} connection...")
    if not client.health_check():
        print(f"{RED}✖ {client.name} is not running!{RESET}")
        print(f"{GREY}   Start it with: ollama serve{RESET}")
        raise ModelQueryError(f"{client.name} is not running. Start it with: ollama serve")
    print(f"{GREEN}   ✅ {client.name} connected!{RESET}")

    if problem is None:
        problem = read_problem_interactive(input_func)

    print(f"\n{BOLD}📌 STEP 1: Reading problem...{RESET}")
    print(f"   Problem: {problem.description[:50]}...")
    print(f"   Path: {problem.base_path}")

    print(f"\n{BOLD}📌 STEP 2: Finding related files...{RESET}")
    files = select_relevant_files(problem, config=config)
    print(f"   Found {len(files)} relevant file(s)")

    analysis = analyze_bug_logic(client, problem, files)
    fixes = suggest_fix(client, analysis, files)

    print(f"\n{GREEN}✅ Agent cycle complete!{RESET}")

    return {
        'problem': problem,
        'files': files,
        'analysis': analysis,
        'fixes': fixes
    }

def run_agent_with_input(client, description, file_paths=None, base_path=None, config=None):
    """Run the agent loop non-interactively; the description doubles as the error log."""
    problem = ProblemInput(
        description=description,
        error_log=description,
        file_paths=file_paths or None,
        base_path=base_path or os.getcwd()
    )
    return run_agent_loop(client, problem, config=config)
