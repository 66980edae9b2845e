"""
Prompt builders for every agent mode, rendered with Jinja2.

Code context never carries more than MAX_RELEVANT_FILES files.
"""

import os

from jinja2 import Environment, StrictUndefined

from .config import MAX_RELEVANT_FILES


def code_context(files, chars=None, count=MAX_RELEVANT_FILES, full_path=False, marker="..."):
    """
    Render files as `--- name ---` blocks separated by blank lines.

    Args:
        files: ScannedFile-like objects.
        chars: Truncate each file's content to this many characters.
        count: Number of files to include, never more than MAX_RELEVANT_FILES.
        full_path: Use the absolute path in the header instead of the name.
        marker: Appended after truncated content.
    """
    count = min(count, MAX_RELEVANT_FILES)
    blocks = []
    for f in list(files)[:count]:
        header = f.path if full_path else os.path.basename(f.path)
        content = f.content if chars is None else f"{f.content[:chars]}{marker}"
        blocks.append(f"--- {header} ---\n{content}")
    return "\n\n".join(blocks)

def file_names(files, count=None):
    """Comma-separated base names of the files."""
    files = list(files) if count is None else list(files)[:count]
    return ", ".join(os.path.basename(f.path) for f in files)


_env = Environment(undefined=StrictUndefined, autoescape=False, keep_trailing_newline=False)
_env.filters["code_context"] = code_context
_env.filters["file_names"] = file_names

# =============================================================================
# TEMPLATES
# =============================================================================

DEBUG_TEMPLATE = _env.from_string('''You are a senior software engineer debugging an error. Analyze this error and provide a precise diagnosis.

## Error Message
{{ error_message }}

## Related Code ({{ files | length }} files)
{{ files | code_context }}

## Your Analysis
Provide a JSON response with this EXACT structure:
{
    "errorMeaning": "Clear explanation of what this error means in plain terms",
    "file": "The specific filename where the bug is (e.g., Renderer.ts)",
    "function": "The specific function name containing the bug",
    "line": null,
    "whyItHappens": "Detailed explanation of WHY this error is happening - the root cause",
    "whatToChange": "Step-by-step instructions on exactly what to change to fix this",
    "codeExample": "// Example fixed code snippet"
}

IMPORTANT:
- Return ONLY valid JSON, no markdown code blocks
- Be SPECIFIC about the file and function
- Make whatToChange actionable and clear''')

CONCEPT_TEMPLATE = _env.from_string('''You are a senior developer explaining this system to a new teammate. Be friendly, clear, and insightful.

## Files in Project
{{ files | file_names }}

## Code Samples
{{ files | code_context(500) }}

## Your Explanation
Explain this system like you're talking to a teammate. Provide a JSON response:
{
    "architecture": "High-level overview of what this system does and how it's structured",
    "components": [
        {
            "name": "ComponentName",
            "file": "filename.ts",
            "purpose": "What this component does",
            "dependencies": ["other", "components"]
        }
    ],
    "dataFlow": "Explain how data flows through the system step by step",
    "keyInsights": [
        "Important thing 1 to understand",
        "Important thing 2",
        "Common gotcha or tip"
    ],
    "summary": "One-line summary of the entire system"
}

IMPORTANT: Return ONLY valid JSON. Be conversational but informative.''')

FEATURE_TEMPLATE = _env.from_string('''You are a senior architect helping plan a new feature. Be practical and specific.

## Feature Request
"{{ request }}"

## Existing Codebase
Files: {{ files | file_names }}

## Code Context
{{ files | code_context(400) }}

## Your Plan
Provide a JSON response:
{
    "clarifications": [
        "Question 1 to clarify requirements?",
        "Question 2 about scope?"
    ],
    "approach": "Detailed explanation of the best way to implement this feature, including which patterns to use and why",
    "filesToModify": [
        {
            "file": "NewFile.ts",
            "action": "create",
            "description": "What to add in this file"
        },
        {
            "file": "ExistingFile.ts",
            "action": "modify",
            "description": "What changes to make"
        }
    ],
    "skeletonCode": "// Starter code for the main component\\nexport class NewFeature {\\n  // TODO: implement\\n}",
    "estimatedComplexity": "simple|moderate|complex",
    "warnings": [
        "Thing to watch out for",
        "Potential issue to consider"
    ]
}

IMPORTANT:
- Return ONLY valid JSON
- Be SPECIFIC about files and changes
- Provide REAL skeleton code, not just comments
- Ask 1-3 clarifying questions max''')

BUG_ANALYSIS_TEMPLATE = _env.from_string('''You are a senior software engineer. Analyze this bug and provide a structured explanation.

## Problem Description
{{ problem.description }}

## Error Log
{{ problem.error_log or 'No error log provided' }}

## Related Code ({{ files | length }} files)
{{ files | code_context(full_path=True) }}

## Your Analysis
Provide a JSON response with this exact structure:
{
    "bugExplanation": "Clear explanation of what the bug is",
    "rootCause": "Why this bug is happening - the root cause",
    "affectedCode": ["file1.ts:functionName", "file2.ts:line 10-20"],
    "severity": "low|medium|high|critical",
    "summary": "One-line summary of the issue"
}

IMPORTANT: Return ONLY the JSON object, no markdown code blocks, no extra text.''')

FIX_SUGGESTION_TEMPLATE = _env.from_string('''You are a senior software engineer. Based on this bug analysis, suggest specific code fixes.

## Bug Summary
{{ analysis.summary }}

## Bug Explanation
{{ analysis.bug_explanation }}

## Root Cause
{{ analysis.root_cause }}

## Affected Code
{{ analysis.affected_code | join('\n') }}

## Current Code
{{ files | code_context(count=3, full_path=True) }}

## Your Fix Suggestions
Provide a JSON array with specific fixes:
[
    {
        "file": "filename.ts",
        "description": "What to change",
        "currentCode": "// problematic code snippet",
        "suggestedCode": "// fixed code snippet",
        "explanation": "Why this fix works",
        "priority": "high|medium|low"
    }
]

IMPORTANT: Return ONLY the JSON array, no markdown code blocks, no extra text. If you cannot provide code snippets, omit currentCode and suggestedCode fields.''')

FILE_ISSUES_TEMPLATE = _env.from_string('''Analyze this code for issues, bugs, and improvements.

File: {{ file_path }}

Code:
```
{{ content }}
```

Return a JSON array of issues found. Each issue should have:
- severity: "error" | "warning" | "info"
- line: approximate line number (or null)
- issue: brief description of the problem
- suggestion: how to fix it

If no issues found, return empty array: []

Example response:
[
  {"severity": "warning", "line": 15, "issue": "Unused variable", "suggestion": "Remove or use the variable"},
  {"severity": "error", "line": 42, "issue": "Possible null reference", "suggestion": "Add null check"}
]

Return ONLY valid JSON, no explanation.''')

CHAT_TEMPLATE = _env.from_string('''You are a helpful AI coding assistant. Answer the user's question about their codebase.

Project Files: {{ files | file_names(10) }}

Sample Code:
{{ files | code_context(300, count=3) }}

User Question: {{ message }}

Provide a helpful, concise answer. Be conversational and friendly.''')

CHAT_DEBUG_TEMPLATE = _env.from_string('''You are a senior software engineer. Debug this error:

Error: {{ error }}

Code:
{{ files | code_context(500, marker='') }}

Explain:
1. What is the error?
2. Which file/function?
3. Why it happens?
4. How to fix it?

Be concise and actionable.''')

CHAT_CONCEPT_TEMPLATE = _env.from_string('''Explain this codebase to me like a teammate:

Files: {{ files | file_names }}

Code:
{{ files | code_context(400) }}

Give me:
1. High-level architecture
2. Key components
3. How they work together
4. Important things to know

Be friendly and clear!''')

CHAT_FEATURE_TEMPLATE = _env.from_string('''Plan how to implement this feature:

Request: {{ request }}

Existing Files: {{ files | file_names }}

Code:
{{ files | code_context(300, count=3) }}

Provide:
1. Approach
2. Files to create/modify
3. Skeleton code
4. Warnings

Be practical and specific.''')

PROJECT_CHAT_TEMPLATE = _env.from_string('''You are a helpful AI coding assistant.
Project: {{ project_path or 'Unknown' }}
User: {{ message }}
Respond helpfully and concisely.''')

EDIT_TEMPLATE = _env.from_string('''You are a senior software engineer. Modify this code based on the user's request.

File: {{ file_name }}

Current Code:
```
{{ content }}
```

User Request: {{ request }}

IMPORTANT RULES:
1. Return ONLY the complete modified code
2. Do NOT include any explanations, markdown, or code blocks markers
3. Do NOT add ``` at the start or end
4. The response should be the exact code that will replace the file
5. Keep the same code style and formatting

Modified code:''')

FILE_QUESTION_TEMPLATE = _env.from_string('''You are a helpful AI coding assistant. The user is working on this file:

File: {{ file_name }}
Code:
```
{{ content[:1000] }}...
```

User Question: {{ question }}

Provide a helpful, concise answer.''')

FILE_SUGGEST_TEMPLATE = _env.from_string('''You are a senior software engineer.
File: {{ file_name }}

Current Code:
```
{{ content }}
```

User Request: {{ instruction }}

Provide the improved/fixed code. Return ONLY the code, no explanations.''')

# =============================================================================
# BUILDERS
# =============================================================================

def build_debug_prompt(error_message, files):
    return DEBUG_TEMPLATE.render(error_message=error_message, files=files[:MAX_RELEVANT_FILES])

def build_concept_prompt(files):
    return CONCEPT_TEMPLATE.render(files=files)

def build_feature_prompt(request, files):
    return FEATURE_TEMPLATE.render(request=request, files=files)

def build_bug_analysis_prompt(problem, files):
    return BUG_ANALYSIS_TEMPLATE.render(problem=problem, files=files[:MAX_RELEVANT_FILES])

def build_fix_suggestion_prompt(analysis, files):
    return FIX_SUGGESTION_TEMPLATE.render(analysis=analysis, files=files)

def build_file_issues_prompt(file_path, content, limit=2000):
    return FILE_ISSUES_TEMPLATE.render(file_path=file_path, content=content[:limit])

def build_chat_prompt(message, files):
    return CHAT_TEMPLATE.render(message=message, files=files)

def build_chat_debug_prompt(error, files):
    return CHAT_DEBUG_TEMPLATE.render(error=error, files=files)

def build_chat_concept_prompt(files):
    return CHAT_CONCEPT_TEMPLATE.render(files=files)

def build_chat_feature_prompt(request, files):
    return CHAT_FEATURE_TEMPLATE.render(request=request, files=files)

def build_project_chat_prompt(message, project_path=None):
    return PROJECT_CHAT_TEMPLATE.render(message=message, project_path=project_path)

def build_edit_prompt(file_name, content, request):
    return EDIT_TEMPLATE.render(file_name=file_name, content=content, request=request)

def build_file_question_prompt(file_name, content, question):
    return FILE_QUESTION_TEMPLATE.render(file_name=file_name, content=content, question=question)

def build_file_suggest_prompt(file_name, content, instruction):
    return FILE_SUGGEST_TEMPLATE.render(file_name=file_name, content=content, instruction=instruction)
