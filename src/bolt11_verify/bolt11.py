"""Pure Python BOLT11 invoice decoding.

Decodes the bech32 string, the prefix amount, the timestamp and the
payment-hash and expiry tagged fields. The signature is located and
skipped, never verified. No external Lightning libraries required.

BOLT11 format: ln{currency}{amount}{multiplier}1{timestamp}{tagged fields}{signature}{checksum}
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any

from bolt11_verify import bech32_codec
from bolt11_verify.amount import parse_prefix
from bolt11_verify.exceptions import FieldOverflowError, FormatError
from bolt11_verify.tagged_fields import (
    MAX_SAFE_INTEGER,
    SIGNATURE_WORDS,
    TIMESTAMP_WORDS,
    pack_words,
    scan_tagged_fields,
)

# Real invoices with many route hints run past 1000 characters
MAX_INVOICE_LENGTH = 2048

DEFAULT_EXPIRY_SECONDS = 3600


@dataclass(frozen=True)
class DecodedInvoice:
    """Fields decoded from a BOLT11 invoice."""

    hrp: str
    currency: str
    amount_msat: int | None
    timestamp_unix: int
    payment_hash_hex: str | None
    expiry_seconds: int = DEFAULT_EXPIRY_SECONDS

    @property
    def expires_at_unix(self) -> int:
        return self.timestamp_unix + self.expiry_seconds

    @property
    def amount_sats(self) -> int | None:
        """Amount rounded down to whole satoshis, or None if amount-less."""
        if self.amount_msat is None:
            return None
        return self.amount_msat // 1000

    def is_expired(self, now: float | None = None) -> bool:
        if now is None:
            now = time.time()
        return now >= self.expires_at_unix

    def to_dict(self) -> dict[str, Any]:
        return {
            "hrp": self.hrp,
            "currency": self.currency,
            "amount_msat": self.amount_msat,
            "timestamp_unix": self.timestamp_unix,
            "payment_hash_hex": self.payment_hash_hex,
            "expiry_seconds": self.expiry_seconds,
            "expires_at_unix": self.expires_at_unix,
        }


def decode_invoice(bolt11: str) -> DecodedInvoice:
    """Decode a BOLT11 invoice string.

    Args:
        bolt11: A BOLT11-encoded Lightning invoice (e.g., "lnbc10u1p...").
            Surrounding whitespace and upper case are accepted.

    Returns:
        The decoded invoice.

    Raises:
        FormatError: Malformed bech32, prefix, amount or data layout.
        PrecisionError: A pico amount that is not a whole millisatoshi.
        FieldOverflowError: Timestamp or expiry above 2**53 - 1.
    """
    if not isinstance(bolt11, str) or not bolt11.strip():
        raise FormatError("bolt11 is required")
    invoice = bolt11.strip().lower()

    try:
        data = bech32_codec.decode(invoice, MAX_INVOICE_LENGTH)
    except bech32_codec.Bech32Error as e:
        raise FormatError(f"Invalid bech32 invoice: {e}") from e

    currency, amount_msat = parse_prefix(data.prefix)

    words = data.words
    if len(words) < TIMESTAMP_WORDS + SIGNATURE_WORDS:
        raise FormatError("Invoice too short")

    timestamp_unix = pack_words(words[:TIMESTAMP_WORDS])
    if timestamp_unix <= 0:
        raise FormatError("Invalid invoice timestamp")
    if timestamp_unix > MAX_SAFE_INTEGER:
        raise FieldOverflowError("timestamp", timestamp_unix)

    fields = scan_tagged_fields(
        words, TIMESTAMP_WORDS, len(words) - SIGNATURE_WORDS
    )

    expiry_seconds = fields.expiry_seconds
    if expiry_seconds is None:
        expiry_seconds = DEFAULT_EXPIRY_SECONDS

    return DecodedInvoice(
        hrp=data.prefix,
        currency=currency,
        amount_msat=amount_msat,
        timestamp_unix=timestamp_unix,
        payment_hash_hex=fields.payment_hash_hex,
        expiry_seconds=expiry_seconds,
    )
