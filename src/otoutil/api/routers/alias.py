"""API router for alias normalization helpers.

Exposes pitch range enumeration, pitch-suffix removal and digit-suffix
extraction. Omitted pitch range and case options fall back to the
configured defaults.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from src.otoutil.config import Settings, get_settings
from src.otoutil.utils.pitch_range import (
    CharacterCase,
    check_pitch_range_span,
    pitch_string_range,
    remove_pitch_suffix,
)
from src.otoutil.utils.suffix import CaseSensitivity, digit_suffix

router = APIRouter(prefix="/alias", tags=["alias"])


class PitchRangeResponse(BaseModel):
    """Response model for a pitch range."""

    pitches: list[str] = Field(
        description="Pitch names from bottom to top (empty if endpoints are malformed)",
    )


class RemovePitchSuffixRequest(BaseModel):
    """Request model for stripping a pitch suffix from an alias."""

    alias: str = Field(description="Alias to normalize (e.g., 'kaC4')")
    bottom_pitch: str | None = Field(
        default=None, description="Lowest pitch of the range (e.g., 'C3')"
    )
    top_pitch: str | None = Field(
        default=None, description="Highest pitch of the range (e.g., 'C5')"
    )
    case_sensitivity: CaseSensitivity | None = Field(
        default=None, description="Case policy for matching the suffix"
    )
    case: CharacterCase | None = Field(
        default=None, description="Letter case of the candidate pitch names"
    )


class RemovePitchSuffixResponse(BaseModel):
    """Response model for pitch-suffix removal."""

    alias: str = Field(description="Alias with the pitch suffix removed")
    removed_pitch: str | None = Field(
        default=None, description="Pitch name that was removed, if any"
    )


class DigitSuffixRequest(BaseModel):
    """Request model for digit-suffix extraction."""

    text: str = Field(description="Text to inspect (e.g., 'ka2')")


class DigitSuffixResponse(BaseModel):
    """Response model for digit-suffix extraction."""

    digits: str = Field(description="Trailing digits (empty if none)")
    position: int | None = Field(
        default=None,
        description="Start index of the digits; null when absent or the whole text",
    )


@router.get("/pitch-range", response_model=PitchRangeResponse)
async def get_pitch_range(
    settings: Annotated[Settings, Depends(get_settings)],
    bottom: Annotated[str | None, Query(description="Lowest pitch")] = None,
    top: Annotated[str | None, Query(description="Highest pitch")] = None,
    case: Annotated[
        CharacterCase | None, Query(description="Letter case of pitch names")
    ] = None,
) -> PitchRangeResponse:
    """List every pitch name between two endpoints, inclusive.

    Raises:
        PitchRangeTooLargeError: If the range exceeds
            ``Settings.max_pitch_range_octaves``; mapped to HTTP 400.
    """
    bottom = bottom if bottom is not None else settings.default_bottom_pitch
    top = top if top is not None else settings.default_top_pitch
    check_pitch_range_span(bottom, top, settings.max_pitch_range_octaves)

    pitches = pitch_string_range(bottom, top, case or settings.pitch_alphabet_case)
    return PitchRangeResponse(pitches=pitches)


@router.post("/remove-pitch-suffix", response_model=RemovePitchSuffixResponse)
async def strip_pitch_suffix(
    request: RemovePitchSuffixRequest,
    settings: Annotated[Settings, Depends(get_settings)],
) -> RemovePitchSuffixResponse:
    """Remove the first pitch name of the range found in the alias.

    Raises:
        PitchRangeTooLargeError: If the range exceeds
            ``Settings.max_pitch_range_octaves``; mapped to HTTP 400.
    """
    bottom = (
        request.bottom_pitch
        if request.bottom_pitch is not None
        else settings.default_bottom_pitch
    )
    top = request.top_pitch if request.top_pitch is not None else settings.default_top_pitch
    check_pitch_range_span(bottom, top, settings.max_pitch_range_octaves)

    alias, removed = remove_pitch_suffix(
        request.alias,
        bottom,
        top,
        request.case_sensitivity or settings.pitch_case_sensitivity,
        request.case or settings.pitch_alphabet_case,
    )
    return RemovePitchSuffixResponse(alias=alias, removed_pitch=removed)


@router.post("/digit-suffix", response_model=DigitSuffixResponse)
async def extract_digit_suffix(request: DigitSuffixRequest) -> DigitSuffixResponse:
    """Split the trailing digit run off a string."""
    digits, position = digit_suffix(request.text)
    return DigitSuffixResponse(digits=digits, position=position)
