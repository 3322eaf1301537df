# Utils package (alias string helpers, oto.ini parser)

from src.otoutil.utils.pitch_range import (
    CharacterCase,
    pitch_name_order,
    pitch_string_range,
    remove_pitch_suffix,
)
from src.otoutil.utils.suffix import CaseSensitivity, digit_suffix, remove_suffix

__all__ = [
    "CaseSensitivity",
    "CharacterCase",
    "digit_suffix",
    "pitch_name_order",
    "pitch_string_range",
    "remove_pitch_suffix",
    "remove_suffix",
]
