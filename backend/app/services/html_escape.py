"""
HTML escaping for user-supplied values embedded in email bodies.
"""

from typing import Any

_HTML_ENTITIES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#39;",
}


def escape_html(value: Any) -> str:
    """
    Replace ``& < > " '`` with their HTML entities.

    Non-string input (including None) yields an empty string.
    """
    if not isinstance(value, str):
        return ""
    return "".join(_HTML_ENTITIES.get(ch, ch) for ch in value)
