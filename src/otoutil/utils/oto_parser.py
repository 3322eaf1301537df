"""Parser utilities for oto.ini files.

Oto.ini files define timing parameters for UTAU voicebanks, one entry per
line. These files are often encoded in Shift-JIS (Japanese Windows
encoding) but may also be UTF-8.
"""

import contextlib
import logging
import os
import tempfile
from pathlib import Path

from src.otoutil.config import get_settings
from src.otoutil.domain.oto_entry import OtoEntry
from src.otoutil.domain.oto_errors import OtoEntryError

logger = logging.getLogger(__name__)

COMMENT_PREFIXES = ("#", ";", "//")


class OtoParseError(Exception):
    """Raised by strict parsing when a line is not a valid oto entry."""

    def __init__(self, line_number: int, error: OtoEntryError, message: str) -> None:
        self.line_number = line_number
        self.error = error
        super().__init__(f"Line {line_number}: {message}")


def parse_oto_line(line: str) -> OtoEntry | None:
    """Parse a single oto.ini line into an OtoEntry.

    Args:
        line: A single line from an oto.ini file.

    Returns:
        None for blank and comment lines, otherwise the parsed entry
        (which may be invalid; see ``OtoEntry.valid``).

    Examples:
        >>> parse_oto_line("_ka.wav=- ka,45,120,-140,80,15").alias
        '- ka'
        >>> parse_oto_line("# comment") is None
        True
    """
    line = line.strip()

    if not line:
        return None

    # Comment markers used by various oto.ini editors
    if line.startswith(COMMENT_PREFIXES):
        return None

    return OtoEntry.from_oto_line(line)


def parse_oto_file(content: str, strict: bool = False) -> list[OtoEntry]:
    """Parse entire oto.ini file content into a list of OtoEntry objects.

    Args:
        content: The full text content of an oto.ini file.
        strict: Raise on the first invalid line instead of skipping it.

    Returns:
        List of valid OtoEntry objects in file order.

    Raises:
        OtoParseError: In strict mode, if any line fails to parse.
    """
    entries: list[OtoEntry] = []

    for line_number, line in enumerate(content.splitlines(), start=1):
        entry = parse_oto_line(line)
        if entry is None:
            continue
        if not entry.valid:
            if strict:
                raise OtoParseError(line_number, entry.error, entry.error_string)
            logger.debug(
                "Skipping oto line %d (%s): %r", line_number, entry.error_string, line
            )
            continue
        entries.append(entry)

    return entries


def serialize_oto_entries(entries: list[OtoEntry]) -> str:
    """Serialize a list of OtoEntry objects back to oto.ini format.

    Args:
        entries: List of OtoEntry objects to serialize.

    Returns:
        String in oto.ini format with entries separated by newlines.
    """
    return "\n".join(entry.to_oto_line() for entry in entries)


def decode_oto_bytes(data: bytes) -> str:
    """Decode oto.ini file bytes with automatic encoding detection.

    Encodings from ``Settings.oto_encodings`` are tried in order.

    Args:
        data: Raw bytes from an oto.ini file.

    Returns:
        Decoded string content.
    """
    for encoding in get_settings().oto_encodings:
        try:
            return data.decode(encoding)
        except (UnicodeDecodeError, LookupError):
            continue

    # Last resort: decode with replacement characters
    logger.warning("Could not detect oto.ini encoding, decoding with replacement")
    return data.decode("utf-8", errors="replace")


def read_oto_file(path: Path | str, strict: bool = False) -> list[OtoEntry]:
    """Read and parse an oto.ini file from disk.

    Args:
        path: Path to the oto.ini file.
        strict: Raise on the first invalid line instead of skipping it.

    Returns:
        List of parsed OtoEntry objects.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        OtoParseError: In strict mode, if any line fails to parse.
    """
    path = Path(path)
    entries = parse_oto_file(decode_oto_bytes(path.read_bytes()), strict=strict)
    logger.info("Read %d oto entries from %s", len(entries), path)
    return entries


def write_oto_file(
    path: Path | str,
    entries: list[OtoEntry],
    encoding: str | None = None,
) -> None:
    """Write OtoEntry objects to an oto.ini file atomically.

    Writes to a temporary file first, then uses os.replace() to
    atomically move it to the final path.

    Args:
        path: Path where the oto.ini file should be written.
        entries: List of OtoEntry objects to write.
        encoding: File encoding. Defaults to ``Settings.oto_write_encoding``;
                  use 'cp932' for compatibility with older UTAU versions.
    """
    path = Path(path)
    encoding = encoding or get_settings().oto_write_encoding
    content = serialize_oto_entries(entries)

    # Temp file in the same directory so os.replace() stays on one filesystem
    fd, tmp_path = tempfile.mkstemp(
        dir=path.parent,
        prefix=".oto_",
        suffix=".tmp",
    )
    try:
        with os.fdopen(fd, "w", encoding=encoding) as f:
            f.write(content + "\n")
        os.replace(tmp_path, path)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(tmp_path)
        raise

    logger.info("Wrote %d oto entries to %s", len(entries), path)
