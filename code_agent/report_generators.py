"""
Report generation utilities for the agent's results: terminal printers,
JSON output and an HTML report of a project issue scan.
"""

import os
import json
import dataclasses
from datetime import datetime

from jinja2 import Template

from .config import (
    BOLD, RESET, GREY, GREEN, YELLOW, RED, DOUBLE_RULE,
    SEVERITY_ICONS, COMPLEXITY_ICONS, FILE_ACTION_ICONS
)
from .utils import remove_ansi_colors

SECTION_RULE = "─" * 30


def _section(title):
    print(f"\n{BOLD}{title}{RESET}")
    print(f"{GREY}{SECTION_RULE}{RESET}")

# =============================================================================
# TERMINAL PRINTERS
# =============================================================================

def print_debug_result(result):
    print(f"\n{BOLD}📋 Debug Analysis Results{RESET}")
    print(DOUBLE_RULE)

    _section("❓ Error Meaning:")
    print(result['error_meaning'])

    _section("📁 Location:")
    print(f"   File: {result['file']}")
    print(f"   Function: {result['function']}")
    if result.get('line'):
        print(f"   Line: {result['line']}")

    _section("🔍 Why It Happens:")
    print(result['why_it_happens'])

    _section("🔧 What To Change:")
    print(result['what_to_change'])

    if result.get('code_example'):
        _section("💻 Code Example:")
        print(result['code_example'])

def print_concept_result(result):
    print(f"\n{BOLD}📖 System Understanding{RESET}")
    print(DOUBLE_RULE)

    _section("🏗️ Architecture:")
    print(result['architecture'])

    if result['components']:
        _section("🧩 Key Components:")
        for comp in result['components']:
            print(f"\n   📦 {comp['name']} ({comp['file']})")
            print(f"      {comp['purpose']}")
            if comp['dependencies']:
                print(f"{GREY}      → Uses: {', '.join(comp['dependencies'])}{RESET}")

    _section("🔄 Data Flow:")
    print(result['data_flow'])

    if result['key_insights']:
        _section("💡 Key Insights:")
        for insight in result['key_insights']:
            print(f"   • {insight}")

    _section("📝 Summary:")
    print(f"   {result['summary']}")

def print_feature_result(result):
    print(f"\n{BOLD}📋 Feature Implementation Plan{RESET}")
    print(DOUBLE_RULE)

    complexity = result['estimated_complexity']
    print(f"\n⚡ Complexity: {COMPLEXITY_ICONS.get(complexity, '')} {complexity.upper()}")

    if result['clarifications']:
        _section("❓ Clarifying Questions:")
        for i, question in enumerate(result['clarifications'], 1):
            print(f"   {i}. {question}")

    _section("🎯 Recommended Approach:")
    print(result['approach'])

    if result['files_to_modify']:
        _section("📁 Files to Modify:")
        for mod in result['files_to_modify']:
            icon = FILE_ACTION_ICONS.get(mod['action'], '')
            print(f"\n   {icon} {mod['file']} [{mod['action'].upper()}]")
            print(f"      {mod['description']}")

    _section("💻 Skeleton Code:")
    print(result['skeleton_code'])

    if result['warnings']:
        _section("⚠️ Warnings:")
        for warning in result['warnings']:
            print(f"{YELLOW}   • {warning}{RESET}")

def print_bug_analysis(analysis):
    severity = analysis['severity']
    print(f"\n{BOLD}🐛 Bug Analysis{RESET}")
    print(DOUBLE_RULE)
    print(f"\n{SEVERITY_ICONS.get(severity, '')} Severity: {severity.upper()}")
    print(f"📝 Summary: {analysis['summary']}")

    _section("❓ What's the bug:")
    print(analysis['bug_explanation'])

    _section("🔍 Root cause:")
    print(analysis['root_cause'])

    if analysis['affected_code']:
        _section("📍 Affected code:")
        for location in analysis['affected_code']:
            print(f"   • {location}")

def print_fix_suggestions(fixes):
    print(f"\n{BOLD}🔧 Fix Suggestions{RESET}")
    print(DOUBLE_RULE)

    for i, fix in enumerate(fixes, 1):
        icon = {'high': RED, 'medium': YELLOW, 'low': GREEN}.get(fix['priority'], '')
        print(f"\n{icon}[{fix['priority'].upper()}]{RESET} {i}. {fix['file']}")
        print(f"   {fix['description']}")
        if fix.get('current_code'):
            print(f"{GREY}   Current:{RESET}")
            print(fix['current_code'])
        if fix.get('suggested_code'):
            print(f"{GREEN}   Suggested:{RESET}")
            print(fix['suggested_code'])
        if fix['explanation'] and fix['explanation'] != fix['description']:
            print(f"{GREY}   Why: {fix['explanation']}{RESET}")

def print_project_analysis(result):
    if result['issues']:
        print(f"\n{BOLD}📋 Issues Found:{RESET}")
        print(f"{GREY}{'─' * 50}{RESET}")

        for issue in result['issues']:
            icon = SEVERITY_ICONS.get(issue['severity'], 'ℹ️')
            location = f"{issue['file']}:{issue['line']}" if issue.get('line') else issue['file']
            print(f"\n{icon} {location}")
            print(f"   Issue: {issue['issue']}")
            print(f"   Fix: {issue['suggestion']}")

    print(f"\n{GREEN}✅ Done!{RESET}")

# =============================================================================
# JSON OUTPUT
# =============================================================================

def _to_serializable(value):
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        if hasattr(value, 'to_dict'):
            return value.to_dict(include_content=False)
        return {k: _to_serializable(v) for k, v in dataclasses.asdict(value).items()}
    if isinstance(value, dict):
        return {k: _to_serializable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_serializable(v) for v in value]
    return value

def format_json(result):
    """Serialize a mode result, dataclasses included, as indented JSON."""
    return json.dumps(_to_serializable(result), indent=2, ensure_ascii=False)

# =============================================================================
# HTML REPORT
# =============================================================================

HTML_TEMPLATE = '''
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>Project Issue Report</title>
    <style>
        body { font-family: Arial, sans-serif; background: #f8f8f8; color: #222; }
        .container { max-width: 900px; margin: 2em auto; background: #fff; padding: 2em; border-radius: 8px; box-shadow: 0 2px 8px #0001; }
        h1 { color: #2d5be3; }
        .timestamp { color: #888; font-size: 0.9em; }
        .summary { background: #e8f5e9; padding: 1em; border-radius: 6px; }
        .issue { border-left: 4px solid #888; padding: 0.5em 1em; margin: 1em 0; background: #fafafa; }
        .issue.error { border-color: #d32f2f; }
        .issue.warning { border-color: #f9a825; }
        .issue.info { border-color: #1976d2; }
        .meta { color: #666; font-size: 0.9em; }
    </style>
</head>
<body>
    <div class="container">
        <h1>Project Issue Report</h1>
        <div class="timestamp">Generated: {{ timestamp }}</div>
        <p>Project: <code>{{ project_path }}</code></p>
        <div class="summary">{{ summary }}</div>
        {% for issue in issues %}
        <div class="issue {{ issue.severity }}">
            <div><strong>{{ issue.file }}{% if issue.line %}:{{ issue.line }}{% endif %}</strong>
                <span class="meta">[{{ issue.severity }} · {{ issue.domain }}]</span></div>
            <div>Issue: {{ issue.issue }}</div>
            <div>Fix: {{ issue.suggestion }}</div>
        </div>
        {% else %}
        <p>No issues found.</p>
        {% endfor %}
    </div>
</body>
</html>
'''

def generate_html_report(result, output_dir=None):
    """
    Write an HTML report of a project issue scan.

    Returns:
        str: Path of the written report.
    """
    output_dir = output_dir or result['project_path']
    template = Template(HTML_TEMPLATE, autoescape=True)
    html = template.render(
        timestamp=datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
        project_path=result['project_path'],
        summary=remove_ansi_colors(result['summary']),
        issues=result['issues']
    )

    out_path = os.path.join(output_dir, "agent-report.html")
    with open(out_path, "w", encoding="utf-8") as f:
        f.write(html)
    print(f"{GREEN}HTML report generated at: {out_path}{RESET}")
    return out_path
