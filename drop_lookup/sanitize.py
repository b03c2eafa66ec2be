"""Escaping helpers for the rendering boundary.

The search core works on raw strings; these are applied only when a view
embeds dataset text into markup or builds a file name from user input.
"""

import re

_ESCAPES = {
    "<": "&lt;",
    ">": "&gt;",
    "&": "&amp;",
    '"': "&quot;",
    "'": "&#x27;",
}

_ESCAPE_RE = re.compile(r"[<>&\"']")

# ASCII word characters plus the CJK Unified Ideographs block used by version names
_VERSION_NAME_RE = re.compile(r"[^A-Za-z0-9_\u4e00-\u9fa5]")


def escape(value) -> str:
    """Escape HTML-significant characters.

    Args:
        value: Text to escape. Anything that is not a ``str`` yields "".

    Returns:
        The escaped text
    """
    if not isinstance(value, str):
        return ""
    return _ESCAPE_RE.sub(lambda m: _ESCAPES[m.group(0)], value)


def sanitize_version_name(name: str) -> str:
    """Strip a version identifier down to characters safe for a file name."""
    if not isinstance(name, str):
        return ""
    return _VERSION_NAME_RE.sub("", name)
