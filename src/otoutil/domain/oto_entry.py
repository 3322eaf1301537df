"""Pydantic model for oto.ini entries."""

import logging
import math
import re
from collections.abc import Callable
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, PrivateAttr

from src.otoutil.domain.oto_errors import OtoEntryError, error_message

logger = logging.getLogger(__name__)

# Decimal literal: optional sign, fraction and exponent. Rejects inf/nan
# and digit separators that float() would otherwise accept.
_DECIMAL_PATTERN = re.compile(
    r"\s*[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?\s*"
)


class OtoField(str, Enum):
    """Data fields of an oto entry, in line order."""

    FILENAME = "filename"
    ALIAS = "alias"
    LEFT = "left"
    CONSONANT = "consonant"
    RIGHT = "right"
    PREUTTERANCE = "preutterance"
    OVERLAP = "overlap"


FieldObserver = Callable[["OtoEntry", OtoField], None]

# Numeric fields in the order they appear after the alias
_NUMERIC_FIELDS: tuple[tuple[OtoField, OtoEntryError], ...] = (
    (OtoField.LEFT, OtoEntryError.LEFT_CONVERT_FAILED),
    (OtoField.CONSONANT, OtoEntryError.CONSONANT_CONVERT_FAILED),
    (OtoField.RIGHT, OtoEntryError.RIGHT_CONVERT_FAILED),
    (OtoField.PREUTTERANCE, OtoEntryError.PRE_UTTERANCE_CONVERT_FAILED),
    (OtoField.OVERLAP, OtoEntryError.OVERLAP_CONVERT_FAILED),
)


def _parse_decimal(text: str) -> float | None:
    """Convert a decimal literal to float, or None if it is not one."""
    if not _DECIMAL_PATTERN.fullmatch(text):
        return None
    value = float(text)
    if not math.isfinite(value):
        return None
    return value


class OtoEntry(BaseModel):
    """Single entry in an oto.ini file.

    Represents one alias configuration for a WAV sample. Multiple entries
    can reference the same WAV file with different aliases.

    Oto.ini line format:
        filename.wav=alias,left,consonant,right,preutterance,overlap

    Entries built from keyword arguments are always valid. Entries built
    with :meth:`from_oto_line` carry the parse outcome in :attr:`valid`
    and :attr:`error` instead of raising.

    Equality compares the seven data fields only. Validity, error state
    and the attached observer never take part.

    Instances are not internally thread-safe; do not mutate one entry
    from several threads without external locking.
    """

    filename: str = Field(
        description="Sample WAV filename (e.g., '_ka.wav')",
        min_length=1,
    )
    alias: str = Field(
        description="Alias looked up by the synthesizer (e.g., '- ka'); may be empty",
    )
    left: float = Field(
        description="Playback start position in milliseconds",
    )
    consonant: float = Field(
        description="Fixed region end - portion not stretched during synthesis (ms)",
    )
    right: float = Field(
        description="Playback end position in ms. Negative = from audio end",
    )
    preutterance: float = Field(
        description="How early to start before the note begins (ms)",
    )
    overlap: float = Field(
        description="Crossfade duration with previous note (ms). Negative values create gaps.",
    )

    _valid: bool = PrivateAttr(default=True)
    _error: OtoEntryError | None = PrivateAttr(default=None)
    _observer: FieldObserver | None = PrivateAttr(default=None)

    @classmethod
    def from_oto_line(cls, line: str) -> "OtoEntry":
        """Parse a single oto.ini line.

        Rules are applied in order and the first violation wins: empty
        line, missing '=', empty filename, then each numeric field from
        left to overlap. Numeric fields parsed before the failing one keep
        their values on the returned entry.

        Args:
            line: One line of an oto.ini file, without the line break.

        Returns:
            The parsed entry. Check :attr:`valid` before using it.

        Examples:
            >>> OtoEntry.from_oto_line("_ka.wav=- ka,45,120,-140,80,15").valid
            True
            >>> OtoEntry.from_oto_line("_ka.wav=- ka,x,120,-140,80,15").error
            <OtoEntryError.LEFT_CONVERT_FAILED: 'left_convert_failed'>
        """
        entry = cls.model_construct(
            filename="",
            alias="",
            left=0.0,
            consonant=0.0,
            right=0.0,
            preutterance=0.0,
            overlap=0.0,
        )

        if not line:
            return entry._fail(OtoEntryError.EMPTY_OTO_STRING, line)

        filename, separator, parameters = line.partition("=")
        if not separator:
            return entry._fail(OtoEntryError.FILE_NAME_SEPARATOR_NOT_FOUND, line)

        entry.filename = filename
        if not filename:
            return entry._fail(OtoEntryError.EMPTY_FILE_NAME, line)

        fields = parameters.split(",")
        entry.alias = fields[0]

        for index, (field, error) in enumerate(_NUMERIC_FIELDS, start=1):
            text = fields[index] if index < len(fields) else ""
            value = _parse_decimal(text)
            if value is None:
                return entry._fail(error, line)
            setattr(entry, field.value, value)

        return entry

    def _fail(self, error: OtoEntryError, line: str) -> "OtoEntry":
        self._error = error
        self._valid = False
        logger.debug("Failed to parse oto line %r: %s", line, error.value)
        return self

    @property
    def valid(self) -> bool:
        """True if the entry was constructed directly or parsed without error."""
        return self._valid

    @property
    def error(self) -> OtoEntryError | None:
        """Parse error kind, or None for a valid entry."""
        return self._error

    @property
    def error_string(self) -> str:
        """Human-readable message for :attr:`error` ("" when valid)."""
        return error_message(self._error)

    def set_observer(self, observer: FieldObserver | None) -> None:
        """Attach a callback invoked after each data field assignment.

        The callback receives the entry and the :class:`OtoField` that was
        assigned. Pass None to detach.
        """
        self._observer = observer

    def __setattr__(self, name: str, value: Any) -> None:
        super().__setattr__(name, value)
        if name in type(self).model_fields and self._observer is not None:
            self._observer(self, OtoField(name))

    def _data(self) -> tuple[str, str, float, float, float, float, float]:
        return (
            self.filename,
            self.alias,
            self.left,
            self.consonant,
            self.right,
            self.preutterance,
            self.overlap,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OtoEntry):
            return NotImplemented
        return self._data() == other._data()

    def to_oto_line(self) -> str:
        """Serialize this entry back to oto.ini line format.

        Numbers are written in fixed notation with three decimals. The
        filename and alias are written as-is, so values containing '=' or
        ',' do not survive a round trip.

        Returns:
            String in format: filename.wav=alias,left,consonant,right,preutterance,overlap
        """
        return (
            f"{self.filename}={self.alias},"
            f"{self.left:.3f},{self.consonant:.3f},{self.right:.3f},"
            f"{self.preutterance:.3f},{self.overlap:.3f}"
        )

    def __str__(self) -> str:
        """String representation as oto.ini line."""
        return self.to_oto_line()
