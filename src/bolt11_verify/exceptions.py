"""bolt11-verify exceptions."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Category of a decode or verification failure."""

    FORMAT = "format"
    PRECISION = "precision"
    OVERFLOW = "overflow"
    MISMATCH = "mismatch"


class Bolt11Error(Exception):
    """Base exception for bolt11-verify."""


class DecodeError(Bolt11Error):
    """Invoice could not be decoded. No partial result is ever returned."""

    kind: ErrorKind = ErrorKind.FORMAT

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class FormatError(DecodeError):
    """Malformed prefix, bad bech32 data, bad amount or structural damage."""

    kind = ErrorKind.FORMAT


class TruncationError(FormatError):
    """A tagged field header or payload runs past the signature block."""


class PrecisionError(DecodeError):
    """Amount is not representable as a whole millisatoshi."""

    kind = ErrorKind.PRECISION

    def __init__(self, amount: str):
        self.amount = amount
        super().__init__(
            f"Amount {amount} is not representable as a whole millisatoshi"
        )


class FieldOverflowError(DecodeError, OverflowError):
    """A packed integer field exceeds the 2**53 - 1 safety bound."""

    kind = ErrorKind.OVERFLOW

    def __init__(self, field_name: str, value: int):
        self.field_name = field_name
        self.value = value
        super().__init__(f"{field_name} too large: {value}")


class PromptRequestError(Bolt11Error):
    """Prompt submission to promptd failed."""

    def __init__(self, reason: str, status_code: int | None = None):
        self.reason = reason
        self.status_code = status_code
        super().__init__(reason)
