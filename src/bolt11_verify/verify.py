"""Cross-check a BOLT11 invoice against an expected invoice body.

Pure validation: no network calls, no side effects. Checks run in a fixed
order (payment hash, amount, expiry) and stop at the first failure.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from typing import Any

from bolt11_verify.bolt11 import DecodedInvoice, decode_invoice
from bolt11_verify.exceptions import DecodeError, ErrorKind

log = logging.getLogger(__name__)

_DIGITS_RE = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of verify_invoice()."""

    ok: bool
    error: str | None = None
    decoded: DecodedInvoice | None = None
    kind: ErrorKind | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "error": self.error,
            "decoded": self.decoded.to_dict() if self.decoded else None,
        }


def _coerce_int(value: Any) -> int | None:
    """Convert an expected value to an exact int, or None if it is not one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return int(value)
        return None
    if isinstance(value, str):
        digits = value.strip()
        if not _DIGITS_RE.fullmatch(digits):
            return None
        return int(digits)
    return None


def _mismatch(error: str, decoded: DecodedInvoice) -> VerificationResult:
    log.warning("Invoice %s rejected: %s", decoded.payment_hash_hex, error)
    return VerificationResult(
        ok=False, error=error, decoded=decoded, kind=ErrorKind.MISMATCH
    )


def verify_invoice(
    bolt11: str,
    *,
    payment_hash_hex: str | None = None,
    amount_msat: int | str | None = None,
    expires_at_unix: int | str | None = None,
) -> VerificationResult:
    """Decode ``bolt11`` and compare it with the expected fields.

    Only the expected values that are supplied are checked. An invoice with
    no amount passes the amount check, since there is nothing to compare.
    Never raises: decode failures come back as ``ok=False`` with
    ``decoded=None``.
    """
    try:
        decoded = decode_invoice(bolt11)
    except DecodeError as e:
        log.warning("Invoice failed to decode: %s", e)
        return VerificationResult(ok=False, error=str(e), kind=e.kind)

    want_hash = str(payment_hash_hex).strip().lower() if payment_hash_hex else None
    if want_hash and decoded.payment_hash_hex and decoded.payment_hash_hex != want_hash:
        return _mismatch("payment_hash mismatch", decoded)

    if amount_msat is not None and decoded.amount_msat is not None:
        want_amount = _coerce_int(amount_msat)
        if want_amount is None:
            return _mismatch("invalid amount_msat", decoded)
        if decoded.amount_msat != want_amount:
            return _mismatch("amount mismatch", decoded)

    if expires_at_unix is not None:
        want_exp = _coerce_int(expires_at_unix)
        if want_exp is None:
            return _mismatch("invalid expires_at_unix", decoded)
        if decoded.expires_at_unix != want_exp:
            return _mismatch("expires_at_unix mismatch", decoded)

    return VerificationResult(ok=True, decoded=decoded)
