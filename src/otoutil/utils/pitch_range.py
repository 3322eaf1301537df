"""Pitch range enumeration and pitch-suffix removal for aliases.

Multi-pitch voicebanks append the recording pitch to each alias
(e.g., "ka" recorded at C4 becomes "kaC4"). To recover the bare alias we
enumerate every pitch name between two endpoints and strip the first one
that occurs in the alias.

Pitch names are a letter from the seven-letter alphabet followed by an
octave number ("C4", "a3"). Accidentals (sharps/flats) are not part of the
alphabet: "C#4" fails the octave parse and yields no range.
"""

import logging
import re
from enum import Enum

from src.otoutil.utils.suffix import CaseSensitivity, last_index_of, remove_suffix

logger = logging.getLogger(__name__)

_OCTAVE_PATTERN = re.compile(r"\s*[+-]?[0-9]+\s*")


class CharacterCase(str, Enum):
    """Letter case of the generated pitch names."""

    UPPER = "upper"
    LOWER = "lower"


_PITCH_NAME_ORDER: dict[CharacterCase, str] = {
    CharacterCase.UPPER: "CDEFGAB",
    CharacterCase.LOWER: "cdefgab",
}


def pitch_name_order(case: CharacterCase = CharacterCase.UPPER) -> str:
    """Return the seven pitch letters in ascending order for the given case."""
    return _PITCH_NAME_ORDER[case]


def _split_pitch(pitch: str, letter_order: str) -> tuple[int, int] | None:
    """Split a pitch name into (letter index, octave), or None if malformed."""
    if not pitch:
        return None

    letter_index = letter_order.lower().find(pitch[0].lower())
    if letter_index == -1:
        return None

    octave_text = pitch[1:]
    if not _OCTAVE_PATTERN.fullmatch(octave_text):
        return None

    return letter_index, int(octave_text)


def pitch_string_range(
    bottom_pitch: str,
    top_pitch: str,
    case: CharacterCase = CharacterCase.UPPER,
) -> list[str]:
    """Enumerate every pitch name from bottom_pitch to top_pitch inclusive.

    The first octave starts at the bottom letter and the last octave stops
    at the top letter; octaves in between cover the whole alphabet. When
    both pitches share an octave and the bottom letter comes after the top
    letter, the range is empty.

    Args:
        bottom_pitch: Lowest pitch name (e.g., "C3"). The letter is matched
            case-insensitively.
        top_pitch: Highest pitch name (e.g., "B5").
        case: Letter case of the generated names.

    Returns:
        Ordered pitch names, or an empty list when either endpoint is
        empty, starts with an unknown letter, or has a non-integer octave.

    Examples:
        >>> pitch_string_range("F4", "D5")
        ['F4', 'G4', 'A4', 'B4', 'C5', 'D5']
        >>> pitch_string_range("a4", "b4", CharacterCase.LOWER)
        ['a4', 'b4']
    """
    letter_order = pitch_name_order(case)

    bottom = _split_pitch(bottom_pitch, letter_order)
    top = _split_pitch(top_pitch, letter_order)
    if bottom is None or top is None:
        logger.debug(
            "Unrecognized pitch range endpoints %r..%r", bottom_pitch, top_pitch
        )
        return []

    bottom_letter, bottom_octave = bottom
    top_letter, top_octave = top
    last_letter = len(letter_order) - 1

    pitches: list[str] = []
    for octave in range(bottom_octave, top_octave + 1):
        start = bottom_letter if octave == bottom_octave else 0
        end = top_letter if octave == top_octave else last_letter
        pitches.extend(
            f"{letter_order[letter]}{octave}" for letter in range(start, end + 1)
        )
    return pitches


class PitchRangeTooLargeError(Exception):
    """Raised when a requested pitch range spans too many octaves."""


def check_pitch_range_span(bottom_pitch: str, top_pitch: str, max_octaves: int) -> None:
    """Reject a pitch range covering more than max_octaves octaves.

    Malformed endpoints pass, since they produce an empty range anyway.

    Raises:
        PitchRangeTooLargeError: If the range would span too many octaves.
    """
    letter_order = pitch_name_order()
    bottom = _split_pitch(bottom_pitch, letter_order)
    top = _split_pitch(top_pitch, letter_order)
    if bottom is None or top is None:
        return

    octaves = top[1] - bottom[1] + 1
    if octaves > max_octaves:
        raise PitchRangeTooLargeError(
            f"Pitch range {bottom_pitch}..{top_pitch} spans {octaves} octaves "
            f"(maximum {max_octaves})"
        )


def remove_pitch_suffix(
    alias: str,
    bottom_pitch: str,
    top_pitch: str,
    cs: CaseSensitivity = CaseSensitivity.INSENSITIVE,
    case: CharacterCase = CharacterCase.UPPER,
) -> tuple[str, str | None]:
    """Strip a pitch name from an alias.

    Pitches are tried in ascending range order and the first one found
    anywhere in the alias wins; its last occurrence is removed and later
    pitches are never consulted. With range A4..A44 the alias "kaA44"
    loses "A4" (giving "ka4"), not "A44". Pitches outside the range are
    left in place ("kaC6" with range C3..C5).

    Args:
        alias: Alias to normalize (e.g., "kaC4").
        bottom_pitch: Lowest pitch of the voicebank's range.
        top_pitch: Highest pitch of the voicebank's range.
        cs: Case policy for matching the suffix.
        case: Letter case used to generate the candidate pitches.

    Returns:
        A tuple of (alias without the pitch, removed pitch). The alias is
        unchanged and the pitch is None when nothing matched.

    Examples:
        >>> remove_pitch_suffix("kaC4", "C3", "C5")
        ('ka', 'C4')
        >>> remove_pitch_suffix("ka", "C3", "C5")
        ('ka', None)
    """
    for pitch in pitch_string_range(bottom_pitch, top_pitch, case):
        if last_index_of(alias, pitch, cs) != -1:
            return remove_suffix(alias, pitch, cs), pitch
    return alias, None
