"""bolt11-verify — Exact BOLT11 invoice decoding and verification for Python.

Decodes the amount, timestamp, payment hash and expiry of a Lightning
invoice with integer-only arithmetic, and checks them against the invoice
body you expected to receive.

Usage:
    from bolt11_verify import decode_invoice, verify_invoice

    invoice = decode_invoice("lnbc2500u1p...")
    print(invoice.amount_msat, invoice.expires_at_unix)

    result = verify_invoice(
        "lnbc2500u1p...",
        payment_hash_hex=expected_hash,
        amount_msat=250_000_000,
    )
    if not result.ok:
        print(result.error)
"""

from bolt11_verify.bolt11 import DecodedInvoice, decode_invoice
from bolt11_verify.config import PromptdSettings, resolve_promptd_settings
from bolt11_verify.exceptions import (
    Bolt11Error,
    DecodeError,
    ErrorKind,
    FieldOverflowError,
    FormatError,
    PrecisionError,
    PromptRequestError,
    TruncationError,
)
from bolt11_verify.promptd import AsyncPromptClient, PromptClient
from bolt11_verify.tagged_fields import Tag
from bolt11_verify.verify import VerificationResult, verify_invoice

__version__ = "0.1.0"

__all__ = [
    # Decoding
    "decode_invoice",
    "DecodedInvoice",
    "Tag",
    # Verification
    "verify_invoice",
    "VerificationResult",
    # promptd
    "PromptClient",
    "AsyncPromptClient",
    "PromptdSettings",
    "resolve_promptd_settings",
    # Exceptions
    "Bolt11Error",
    "DecodeError",
    "ErrorKind",
    "FormatError",
    "TruncationError",
    "PrecisionError",
    "FieldOverflowError",
    "PromptRequestError",
]
