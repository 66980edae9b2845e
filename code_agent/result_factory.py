"""
result_factory.py

Centralized factories for the dictionaries each agent mode returns, so every
mode reports a consistent, JSON-serializable structure whatever the model
replied.
"""

from typing import Dict, Any, List, Optional

SEVERITIES = ('low', 'medium', 'high', 'critical')
ISSUE_SEVERITIES = ('error', 'warning', 'info')
COMPLEXITIES = ('simple', 'moderate', 'complex')
PRIORITIES = ('low', 'medium', 'high')


def _pick(value, allowed, default):
    return value if value in allowed else default


def create_debug_result(
    error_meaning: str,
    file: str,
    function: str,
    why_it_happens: str,
    what_to_change: str,
    line: Optional[int] = None,
    code_example: Optional[str] = None
) -> Dict[str, Any]:
    """
    Creates the result of a debug run.

    Args:
        error_meaning (str): What the error means in plain terms.
        file (str): File the bug is in.
        function (str): Function the bug is in.
        why_it_happens (str): Root cause.
        what_to_change (str): Fix instructions.
        line (Optional[int]): Line number, when the model knows it.
        code_example (Optional[str]): Example fix.

    Returns:
        Dict[str, Any]: The debug result.
    """
    return {
        'error_meaning': error_meaning,
        'file': file,
        'function': function,
        'line': line,
        'why_it_happens': why_it_happens,
        'what_to_change': what_to_change,
        'code_example': code_example,
    }


def create_component(name: str, file: str, purpose: str, dependencies: Optional[List[str]] = None) -> Dict[str, Any]:
    return {
        'name': name,
        'file': file,
        'purpose': purpose,
        'dependencies': list(dependencies or []),
    }


def create_concept_result(
    architecture: str,
    components: List[Dict[str, Any]],
    data_flow: str,
    key_insights: List[str],
    summary: str
) -> Dict[str, Any]:
    """Creates the result of a concept (architecture explanation) run."""
    return {
        'architecture': architecture,
        'components': components,
        'data_flow': data_flow,
        'key_insights': key_insights,
        'summary': summary,
    }


def create_file_modification(file: str, action: str, description: str) -> Dict[str, Any]:
    return {
        'file': file,
        'action': action if action in ('create', 'modify', 'delete') else 'modify',
        'description': description,
    }


def create_feature_result(
    clarifications: List[str],
    approach: str,
    files_to_modify: List[Dict[str, Any]],
    skeleton_code: str,
    estimated_complexity: str,
    warnings: List[str]
) -> Dict[str, Any]:
    """Creates the result of a feature planning run."""
    return {
        'clarifications': clarifications,
        'approach': approach,
        'files_to_modify': files_to_modify,
        'skeleton_code': skeleton_code,
        'estimated_complexity': _pick(estimated_complexity, COMPLEXITIES, 'moderate'),
        'warnings': warnings,
    }


def create_bug_analysis(
    bug_explanation: str,
    root_cause: str,
    affected_code: List[str],
    severity: str,
    summary: str
) -> Dict[str, Any]:
    """Creates the structured explanation of a bug."""
    if isinstance(affected_code, str):
        affected_code = [affected_code]
    return {
        'bug_explanation': bug_explanation,
        'root_cause': root_cause,
        'affected_code': list(affected_code),
        'severity': _pick(severity, SEVERITIES, 'medium'),
        'summary': summary,
    }


def create_fix_suggestion(
    file: str,
    description: str,
    explanation: str,
    priority: str = 'medium',
    current_code: Optional[str] = None,
    suggested_code: Optional[str] = None
) -> Dict[str, Any]:
    """Creates one suggested fix."""
    return {
        'file': file,
        'description': description,
        'current_code': current_code,
        'suggested_code': suggested_code,
        'explanation': explanation,
        'priority': _pick(priority, PRIORITIES, 'medium'),
    }


def create_file_issue(
    file: str,
    path: str,
    domain: str,
    severity: str,
    issue: str,
    suggestion: str,
    line: Optional[int] = None
) -> Dict[str, Any]:
    """Creates one issue reported by the project scanner."""
    return {
        'file': file,
        'path': path,
        'domain': domain,
        'severity': _pick(severity, ISSUE_SEVERITIES, 'info'),
        'line': line,
        'issue': issue,
        'suggestion': suggestion,
    }
