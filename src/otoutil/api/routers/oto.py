"""API router for parsing and formatting oto.ini entries.

All endpoints are stateless: lines and files go in, parsed entries or
serialized lines come out. Nothing is persisted.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, File, Query, UploadFile
from pydantic import BaseModel, Field

from src.otoutil.domain.oto_entry import OtoEntry
from src.otoutil.domain.oto_errors import OtoEntryError
from src.otoutil.utils.oto_parser import decode_oto_bytes, parse_oto_file

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/oto", tags=["oto"])


# Request/Response models


class OtoLineRequest(BaseModel):
    """Request model for parsing a single oto.ini line."""

    line: str = Field(
        description="One oto.ini line (e.g., '_ka.wav=- ka,45,120,-140,80,15')",
    )


class OtoEntryCreate(BaseModel):
    """Request model for formatting an oto entry."""

    filename: str = Field(
        description="WAV filename (e.g., '_ka.wav')",
        min_length=1,
    )
    alias: str = Field(
        default="",
        description="Alias (e.g., '- ka' for CV, 'a ka' for VCV)",
    )
    left: float = Field(default=0, description="Playback start position (ms)")
    consonant: float = Field(default=0, description="Fixed region end (ms)")
    right: float = Field(
        default=0,
        description="Playback end position in ms (negative = from audio end)",
    )
    preutterance: float = Field(default=0, description="Pre-utterance (ms)")
    overlap: float = Field(default=0, description="Crossfade duration (ms)")

    def to_oto_entry(self) -> OtoEntry:
        """Convert to OtoEntry model."""
        return OtoEntry(
            filename=self.filename,
            alias=self.alias,
            left=self.left,
            consonant=self.consonant,
            right=self.right,
            preutterance=self.preutterance,
            overlap=self.overlap,
        )


class OtoEntryResponse(BaseModel):
    """Response model for a parsed oto entry."""

    filename: str = Field(description="WAV filename")
    alias: str = Field(description="Alias")
    left: float = Field(description="Playback start position (ms)")
    consonant: float = Field(description="Fixed region end (ms)")
    right: float = Field(description="Playback end position (ms)")
    preutterance: float = Field(description="Pre-utterance (ms)")
    overlap: float = Field(description="Crossfade duration (ms)")
    valid: bool = Field(description="Whether the line parsed without error")
    error: OtoEntryError | None = Field(
        default=None, description="Parse error kind, if any"
    )
    error_message: str = Field(default="", description="Human-readable error")
    line: str | None = Field(
        default=None,
        description="Normalized oto.ini line (only for valid entries)",
    )

    @classmethod
    def from_oto_entry(cls, entry: OtoEntry) -> "OtoEntryResponse":
        """Create response from OtoEntry model."""
        return cls(
            filename=entry.filename,
            alias=entry.alias,
            left=entry.left,
            consonant=entry.consonant,
            right=entry.right,
            preutterance=entry.preutterance,
            overlap=entry.overlap,
            valid=entry.valid,
            error=entry.error,
            error_message=entry.error_string,
            line=entry.to_oto_line() if entry.valid else None,
        )


class OtoLineResponse(BaseModel):
    """Response model for a formatted oto.ini line."""

    line: str = Field(description="Serialized oto.ini line")


# Endpoints


@router.post("/parse", response_model=OtoEntryResponse)
async def parse_line(request: OtoLineRequest) -> OtoEntryResponse:
    """Parse one oto.ini line.

    Invalid lines are not an HTTP error: the response carries
    ``valid: false`` with the error kind and message, and any numeric
    fields that parsed before the failing one.
    """
    entry = OtoEntry.from_oto_line(request.line)
    return OtoEntryResponse.from_oto_entry(entry)


@router.post("/format", response_model=OtoLineResponse)
async def format_entry(request: OtoEntryCreate) -> OtoLineResponse:
    """Serialize entry fields to an oto.ini line with three-decimal numbers."""
    return OtoLineResponse(line=request.to_oto_entry().to_oto_line())


@router.post("/parse-file", response_model=list[OtoEntryResponse])
async def parse_file(
    file: Annotated[UploadFile, File(description="oto.ini file to parse")],
    strict: Annotated[
        bool,
        Query(description="Reject the whole file on the first invalid line"),
    ] = False,
) -> list[OtoEntryResponse]:
    """Parse an uploaded oto.ini file.

    The encoding is auto-detected (UTF-8 or Shift-JIS). Blank and comment
    lines are ignored. Invalid lines are skipped unless ``strict`` is set.

    Raises:
        OtoParseError: In strict mode; mapped to HTTP 400.
    """
    content = decode_oto_bytes(await file.read())
    entries = parse_oto_file(content, strict=strict)

    logger.info("Parsed uploaded oto file '%s': %d entries", file.filename, len(entries))

    return [OtoEntryResponse.from_oto_entry(entry) for entry in entries]
