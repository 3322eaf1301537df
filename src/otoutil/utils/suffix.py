"""String helpers for trimming alias suffixes.

Aliases in multi-pitch voicebanks often carry trailing markers such as a
pitch name ("kaC4") or a numbered duplicate ("ka2"). These helpers locate
and remove such markers without touching the rest of the alias.
"""

import re
from enum import Enum


class CaseSensitivity(str, Enum):
    """Case policy used when matching a suffix."""

    SENSITIVE = "sensitive"
    INSENSITIVE = "insensitive"


def last_index_of(string: str, suffix: str, cs: CaseSensitivity) -> int:
    """Return the start of the last occurrence of suffix in string, or -1."""
    if cs is CaseSensitivity.SENSITIVE:
        return string.rfind(suffix)

    # Lookahead so overlapping candidates are all visited
    pattern = re.compile(f"(?={re.escape(suffix)})", re.IGNORECASE)
    last = -1
    for match in pattern.finditer(string):
        last = match.start()
    return last


def remove_suffix(
    string: str,
    suffix: str,
    cs: CaseSensitivity = CaseSensitivity.SENSITIVE,
) -> str:
    """Remove the last occurrence of suffix from string.

    Only the matched span is removed; earlier occurrences are kept.

    Args:
        string: Text to trim.
        suffix: Substring to remove.
        cs: Whether the match is case-sensitive.

    Returns:
        The string without its last occurrence of suffix, or the string
        unchanged when suffix does not occur.

    Examples:
        >>> remove_suffix("hello_world", "world")
        'hello_'
        >>> remove_suffix("kaC4", "c4", CaseSensitivity.INSENSITIVE)
        'ka'
    """
    position = last_index_of(string, suffix, cs)
    if position == -1:
        return string
    return string[:position] + string[position + len(suffix) :]

