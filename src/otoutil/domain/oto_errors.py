"""Error kinds reported by oto.ini line parsing.

Parsing never raises: a failed parse leaves the entry invalid and records
one of these kinds on it. Messages come from a fixed lookup table so the
API and UI show the same text.
"""

from enum import Enum
from types import MappingProxyType


class OtoEntryError(str, Enum):
    """Reason an oto.ini line could not be parsed."""

    UNKNOWN = "unknown"
    EMPTY_OTO_STRING = "empty_oto_string"
    EMPTY_FILE_NAME = "empty_file_name"
    FILE_NAME_SEPARATOR_NOT_FOUND = "file_name_separator_not_found"
    LEFT_CONVERT_FAILED = "left_convert_failed"
    CONSONANT_CONVERT_FAILED = "consonant_convert_failed"
    RIGHT_CONVERT_FAILED = "right_convert_failed"
    PRE_UTTERANCE_CONVERT_FAILED = "pre_utterance_convert_failed"
    OVERLAP_CONVERT_FAILED = "overlap_convert_failed"


OTO_ERROR_MESSAGES = MappingProxyType(
    {
        OtoEntryError.UNKNOWN: "Unknown Error",
        OtoEntryError.EMPTY_OTO_STRING: "The provided string is empty",
        OtoEntryError.EMPTY_FILE_NAME: "The fileName is empty",
        OtoEntryError.FILE_NAME_SEPARATOR_NOT_FOUND: (
            "The separator between fileName and alias are not found."
        ),
        OtoEntryError.LEFT_CONVERT_FAILED: "Convert left string to double failed.",
        OtoEntryError.CONSONANT_CONVERT_FAILED: (
            "Convert consonant string to double failed."
        ),
        OtoEntryError.RIGHT_CONVERT_FAILED: "Convert right string to double failed.",
        OtoEntryError.PRE_UTTERANCE_CONVERT_FAILED: (
            "Convert preUtterance string to double failed."
        ),
        OtoEntryError.OVERLAP_CONVERT_FAILED: (
            "Convert overlap string to double failed."
        ),
    }
)


def error_message(error: OtoEntryError | None) -> str:
    """Return the human-readable message for an error kind ("" for None)."""
    if error is None:
        return ""
    return OTO_ERROR_MESSAGES[error]
