# Domain models package (Pydantic models)

from src.otoutil.domain.oto_entry import FieldObserver, OtoEntry, OtoField
from src.otoutil.domain.oto_errors import (
    OTO_ERROR_MESSAGES,
    OtoEntryError,
    error_message,
)

__all__ = [
    "OTO_ERROR_MESSAGES",
    "FieldObserver",
    "OtoEntry",
    "OtoEntryError",
    "OtoField",
    "error_message",
]
