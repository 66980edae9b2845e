"""
Cleans up model replies: strips markdown fences and pulls JSON out of text.
"""

import json
import re


def strip_code_fences(text):
    """
    Remove a surrounding markdown code block if present.

    Handles ```json ... ```, ``` ... ``` and a missing closing fence.
    """
    text = text.strip()
    if not text.startswith("```"):
        return text

    lines = text.split("\n")
    # Drop the opening fence line (``` or ```lang)
    lines = lines[1:]
    if lines and lines[-1].strip() == "```":
        lines = lines[:-1]
    return "\n".join(lines)

def parse_json_response(text):
    """Parse a JSON reply, tolerating code fences. Returns None on failure."""
    try:
        return json.loads(strip_code_fences(text))
    except (json.JSONDecodeError, TypeError):
        return None

def extract_json_array(text):
    """
    Parse a JSON array from a reply.

    Tries the whole reply first, then the first [...] span in it.
    Returns [] when nothing parses to a list.
    """
    parsed = parse_json_response(text)
    if isinstance(parsed, list):
        return parsed

    match = re.search(r"\[.*\]", text, re.DOTALL)
    if match:
        try:
            parsed = json.loads(match.group())
        except json.JSONDecodeError:
            return []
        if isinstance(parsed, list):
            return parsed

    return []
