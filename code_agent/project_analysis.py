"""
Project issue scanner.

Scans a project and asks the model for issues in each of the first few
files, using a system prompt tuned to the file's technology domain.
"""

import os

from .config import (
    BOLD, RESET, GREY, GREEN, YELLOW, DOUBLE_RULE, PROJECT_SCAN_MIN_CHARS,
    get_configured_knowledge_dir, get_configured_project_scan_limit
)
from .knowledge import detect_from_project, get_domain, list_knowledge_docs
from .llm_client import query_with_domain, ModelQueryError
from .prompts import build_file_issues_prompt
from .repo_scanner import scan_repository
from .response_parser import extract_json_array
from .result_factory import create_file_issue
from .utils import warn


def analyze_file(client, file_path, content, knowledge_dir=None):
    """
    Ask the model for issues in one file.

    Files shorter than PROJECT_SCAN_MIN_CHARS are not sent to the model.

    Returns:
        list: Issues created with `create_file_issue`.
    """
    if len(content) < PROJECT_SCAN_MIN_CHARS:
        return []

    prompt = build_file_issues_prompt(file_path, content)
    response, domain = query_with_domain(
        client, prompt, file_path=file_path, file_content=content, knowledge_dir=knowledge_dir
    )

    return [
        create_file_issue(
            file=os.path.basename(file_path),
            path=file_path,
            domain=domain,
            severity=item.get('severity') or 'info',
            line=item.get('line'),
            issue=item.get('issue') or 'Unknown issue',
            suggestion=item.get('suggestion') or 'Review this code'
        )
        for item in extract_json_array(response)
        if isinstance(item, dict)
    ]

def summarize_issues(issues, files_analyzed, total_files):
    errors = sum(1 for i in issues if i['severity'] == 'error')
    warnings = sum(1 for i in issues if i['severity'] == 'warning')
    return f"Analyzed {files_analyzed}/{total_files} files. Found {errors} errors, {warnings} warnings."

def analyze_project(client, project_path=None, max_files=None, config=None):
    """
    Scan a project and collect issues from the first `max_files` files.

    A file the model fails on is reported and left out of the analyzed count.

    Returns:
        dict: project_path, domain, total_files, files_analyzed, issues, summary.
    """
    config = config or {}
    project_path = project_path or os.getcwd()
    if max_files is None:
        max_files = get_configured_project_scan_limit(config)
    knowledge_dir = get_configured_knowledge_dir(config)

    print(f"\n{BOLD}🔍 Project Issue Scanner{RESET}")
    print(DOUBLE_RULE)
    print(f"📂 Scanning: {project_path}")

    files = scan_repository(project_path, config=config, verbose=False)
    print(f"\n{GREEN}✅ Found {len(files)} files{RESET}")

    project_domain = detect_from_project(files)
    docs = list_knowledge_docs(knowledge_dir)
    print(f"{GREY}🧠 Domain: {get_domain(project_domain['domain'])['name']}"
          f" (knowledge docs: {', '.join(docs) or 'none'}){RESET}")

    issues = []
    files_analyzed = 0

    for scanned in files[:max_files]:
        print(f"\n📄 Analyzing: {scanned.name}")
        try:
            file_issues = analyze_file(client, scanned.path, scanned.content, knowledge_dir=knowledge_dir)
        except ModelQueryError as e:
            warn(f"   ❌ Error analyzing {scanned.name}: {e}")
            continue

        issues.extend(file_issues)
        files_analyzed += 1

        if file_issues:
            print(f"{YELLOW}   ⚠️ Found {len(file_issues)} issues{RESET}")
        else:
            print(f"{GREEN}   ✅ No issues{RESET}")

    summary = summarize_issues(issues, files_analyzed, len(files))
    print(f"\n{GREY}{DOUBLE_RULE}{RESET}")
    print(f"📊 Summary: {summary}")

    return {
        'project_path': project_path,
        'domain': project_domain['domain'],
        'total_files': len(files),
        'files_analyzed': files_analyzed,
        'issues': issues,
        'summary': summary,
    }
