"""
Agent modes - debug an error, explain a codebase, plan a feature.

Each mode builds one prompt, asks the model once and turns the reply into a
result dictionary. A reply that is not valid JSON still produces a result,
with the raw reply in the main text field.
"""

import os

from .config import BOLD, RESET, GREY, DOUBLE_RULE, RULE
from .file_selector import select_relevant_files, NoFilesFoundError
from .models import ProblemInput
from .prompts import build_debug_prompt, build_concept_prompt, build_feature_prompt
from .repo_scanner import scan_repository
from .response_parser import parse_json_response
from .result_factory import (
    create_debug_result, create_concept_result, create_component,
    create_feature_result, create_file_modification
)

# =============================================================================
# DEBUG MODE
# =============================================================================

def run_debug_mode(client, error_message, files):
    """
    Diagnose an error against the given files.

    Returns:
        dict: See `create_debug_result`.
    """
    print(f"\n{BOLD}🐛 Debug Mode - Analyzing Error{RESET}")
    print(DOUBLE_RULE)
    print(f"Error: {error_message}")
    print(f"{GREY}{RULE}{RESET}")

    response = client.query(build_debug_prompt(error_message, files))
    parsed = parse_json_response(response)

    if not isinstance(parsed, dict):
        return create_debug_result(
            error_meaning=response,
            file=files[0].path if files else 'Unknown',
            function='See analysis',
            why_it_happens='See error meaning above',
            what_to_change='Review the analysis for fix suggestions'
        )

    return create_debug_result(
        error_meaning=parsed.get('errorMeaning') or 'Unable to determine',
        file=parsed.get('file') or 'Unknown file',
        function=parsed.get('function') or 'Unknown function',
        line=parsed.get('line') or None,
        why_it_happens=parsed.get('whyItHappens') or 'See analysis',
        what_to_change=parsed.get('whatToChange') or 'See suggestions',
        code_example=parsed.get('codeExample') or None
    )

def debug(client, error_message, base_path=None, file_paths=None, config=None):
    """Main debug entry point: select files for the error, then diagnose it."""
    problem = ProblemInput(
        description=error_message,
        error_log=error_message,
        file_paths=file_paths or None,
        base_path=base_path or os.getcwd()
    )
    files = select_relevant_files(problem, config=config)
    return run_debug_mode(client, error_message, files)

# =============================================================================
# CONCEPT MODE
# =============================================================================

def run_concept_mode(client, files):
    """Explain the architecture of a codebase like a teammate would."""
    print(f"\n{BOLD}📚 Concept Mode - Explaining System{RESET}")
    print(DOUBLE_RULE)

    response = client.query(build_concept_prompt(files))
    parsed = parse_json_response(response)

    if not isinstance(parsed, dict):
        return create_concept_result(
            architecture=response,
            components=[],
            data_flow='See architecture overview',
            key_insights=['Review the architecture explanation above'],
            summary='System analyzed'
        )

    components = [
        create_component(
            name=c.get('name', 'Unknown'),
            file=c.get('file', ''),
            purpose=c.get('purpose', ''),
            dependencies=c.get('dependencies') or []
        )
        for c in parsed.get('components') or []
        if isinstance(c, dict)
    ]

    return create_concept_result(
        architecture=parsed.get('architecture') or response,
        components=components,
        data_flow=parsed.get('dataFlow') or 'See architecture',
        key_insights=parsed.get('keyInsights') or [],
        summary=parsed.get('summary') or 'System analyzed'
    )

def concept(client, target_path=None, config=None):
    """Main concept entry point: scan the project, then explain it."""
    project_path = target_path or os.getcwd()
    files = scan_repository(project_path, config=config)

    if not files:
        raise NoFilesFoundError(
            'No code files found. Make sure the path contains .ts, .js, or .wgsl files.'
        )

    return run_concept_mode(client, files)

# =============================================================================
# FEATURE MODE
# =============================================================================

def run_feature_mode(client, feature_request, files):
    """Plan how to implement a feature in the given codebase."""
    print(f"\n{BOLD}✨ Feature Mode - Planning Implementation{RESET}")
    print(DOUBLE_RULE)
    print(f"Request: {feature_request}")
    print(f"{GREY}{RULE}{RESET}")

    response = client.query(build_feature_prompt(feature_request, files))
    parsed = parse_json_response(response)

    if not isinstance(parsed, dict):
        return create_feature_result(
            clarifications=[],
            approach=response,
            files_to_modify=[],
            skeleton_code='// See approach for implementation details',
            estimated_complexity='moderate',
            warnings=[]
        )

    modifications = [
        create_file_modification(
            file=m.get('file', 'unknown'),
            action=m.get('action', 'modify'),
            description=m.get('description', '')
        )
        for m in parsed.get('filesToModify') or []
        if isinstance(m, dict)
    ]

    return create_feature_result(
        clarifications=parsed.get('clarifications') or [],
        approach=parsed.get('approach') or response,
        files_to_modify=modifications,
        skeleton_code=parsed.get('skeletonCode') or '// No skeleton provided',
        estimated_complexity=parsed.get('estimatedComplexity') or 'moderate',
        warnings=parsed.get('warnings') or []
    )

def feature(client, feature_request, target_path=None, config=None):
    """Main feature entry point: scan the project, then plan the feature."""
    project_path = target_path or os.getcwd()
    files = scan_repository(project_path, config=config)

    if not files:
        raise NoFilesFoundError('No code files found. Make sure the path contains code files.')

    return run_feature_mode(client, feature_request, files)
