# creation/parser.py
"""
Expansion of the compact multi-file expression language.

    home.(html,js), about.(html,js,css)

expands to home.html, home.js, about.html, about.js and about.css. Groups are
separated by commas; a group is a path prefix optionally followed by a
parenthesized, comma-separated list of tokens that are appended to it.
"""

import logging
import os
from typing import List, Tuple

logger = logging.getLogger(__name__)

_SEPARATORS = "/\\"


def normalize_expression(raw: str) -> str:
    """Trims the input, drops leading separators and converts '/' and '\\' to os.sep."""
    text = raw.strip().lstrip(_SEPARATORS)
    for sep in _SEPARATORS:
        text = text.replace(sep, os.sep)
    return text


def _scan_group(text: str, start: int) -> Tuple[str, List[str], int]:
    """
    Reads one group beginning at `start`.

    Returns the raw prefix, the raw tokens and the index just after the group.
    """
    i = start
    if i < len(text) and text[i] == ",":
        i += 1

    prefix_end = i
    while prefix_end < len(text) and text[prefix_end] not in "(,":
        prefix_end += 1
    prefix = text[i:prefix_end]
    i = prefix_end

    if i >= len(text) or text[i] == ",":
        return prefix, [""], i

    # text[i] == "("
    close = text.find(")", i + 1)
    body_end = close if close != -1 else len(text)
    if body_end > i + 1:
        tokens = text[i + 1:body_end].split(",")
        return prefix, tokens, body_end + 1 if close != -1 else body_end

    # "()" or a dangling "(": keep the parenthesis as part of the name.
    literal_end = text.find(",", i)
    if literal_end == -1:
        literal_end = len(text)
    return prefix, [text[i:literal_end]], literal_end


def parse_expression(raw: str) -> List[str]:
    """
    Expands a raw expression into an ordered list of distinct relative paths.

    Never raises. Empty tokens and entries ending in a bare '.' are dropped,
    and duplicates are removed case-insensitively keeping the first one seen.
    """
    text = normalize_expression(raw or "")
    results: List[str] = []
    seen = set()

    i = 0
    while i < len(text):
        prefix, tokens, i = _scan_group(text, i)
        path = prefix.strip()
        for token in tokens:
            value = path + token.strip()
            if not value or value.endswith("."):
                continue
            key = value.casefold()
            if key in seen:
                continue
            seen.add(key)
            results.append(value)

    logger.debug(f"Parsed expression {raw!r} into {results}")
    return results


def is_folder_entry(entry: str) -> bool:
    """True when the entry only asks for a folder (ends with a path separator)."""
    return entry.endswith(os.sep)
