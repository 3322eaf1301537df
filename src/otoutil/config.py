"""Centralized application settings via pydantic-settings.

Loads configuration from environment variables with the OTOUTIL_ prefix.
Defaults suit the common case of a UTF-8 or Shift-JIS voicebank whose
aliases carry upper-case pitch suffixes.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings

from src.otoutil.utils.pitch_range import CharacterCase
from src.otoutil.utils.suffix import CaseSensitivity


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Examples:
        Prefer Shift-JIS when writing oto.ini for older UTAU versions::

            OTOUTIL_OTO_WRITE_ENCODING=cp932 uv run fastapi dev src/otoutil/main.py

        Widen the default pitch range::

            OTOUTIL_DEFAULT_BOTTOM_PITCH=C0 OTOUTIL_DEFAULT_TOP_PITCH=B8 uv run fastapi dev src/otoutil/main.py
    """

    # oto.ini encodings, tried in order when decoding
    oto_encodings: list[str] = ["utf-8-sig", "utf-8", "cp932", "shift_jis"]
    oto_write_encoding: str = "utf-8"

    # Pitch suffix removal defaults
    pitch_alphabet_case: CharacterCase = CharacterCase.UPPER
    pitch_case_sensitivity: CaseSensitivity = CaseSensitivity.INSENSITIVE
    default_bottom_pitch: str = "C1"
    default_top_pitch: str = "B7"
    # Upper bound on octaves an API request may enumerate
    max_pitch_range_octaves: int = 16

    log_level: str = "INFO"

    model_config = {"env_prefix": "OTOUTIL_"}


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings singleton.

    Uses lru_cache so the Settings object is created once and reused
    across all FastAPI Depends injections.
    """
    return Settings()
