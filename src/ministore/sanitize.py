from __future__ import annotations

import re
from typing import Any

import markupsafe

_KEY_DISALLOWED = re.compile(r"[^a-z0-9_\-]")
_SCRIPT_STYLE = re.compile(r"<(script|style)[^>]*?>.*?</\1\s*>", re.IGNORECASE | re.DOTALL)
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_PERCENT_OCTETS = re.compile(r"%[a-fA-F0-9]{2}")
_WHITESPACE = re.compile(r"\s+")

TRUTHY_VALUES = {"1", "true", "on", "yes"}


def sanitize_key(value: Any) -> str:
    """Lower-case a field key and keep only ``[a-z0-9_-]``."""
    if not isinstance(value, str):
        return ""
    return _KEY_DISALLOWED.sub("", value.lower())


def _strip_markup(text: str) -> str:
    text = _SCRIPT_STYLE.sub("", text)
    # Doubling "&" makes striptags() hand entities back still encoded.
    text = markupsafe.Markup(text.replace("&", "&amp;")).striptags()
    return _PERCENT_OCTETS.sub("", text)


def sanitize_text(value: Any) -> str:
    """Coerce a submitted value to single-line plain text.

    Script and style elements are removed with their contents, other tags and
    HTML comments are removed, entities stay encoded, and a stray ``<`` or
    ``>`` is escaped. Percent-encoded octets and control characters are
    dropped and whitespace is collapsed. The result contains no markup and
    sanitizing it again changes nothing. Non-scalar values become an empty
    string. No length cap is applied.
    """
    if value is None or isinstance(value, (dict, list, tuple, set)):
        return ""
    text = _CONTROL_CHARS.sub(" ", str(value))
    previous = None
    while text != previous:
        previous, text = text, _strip_markup(text)
    text = text.replace("<", "&lt;").replace(">", "&gt;")
    return _WHITESPACE.sub(" ", text).strip()


def parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in TRUTHY_VALUES
    return False
