"""Exact amount parsing for the BOLT11 human-readable prefix.

BOLT11 prefix format: ln{currency}{amount}{multiplier}
Multipliers: m (milli = 0.001), u (micro = 0.000001),
             n (nano = 0.000000001), p (pico = 0.000000000001)

Amounts are returned in millisatoshis using integer arithmetic only.
"""

from __future__ import annotations

import re

from bolt11_verify.exceptions import FormatError, PrecisionError

PREFIX_MARKER = "ln"

# Amount part after the currency: digits + optional multiplier
_AMOUNT_RE = re.compile(r"(?P<digits>[0-9]+)(?P<multiplier>[munp]?)")

# 1 BTC = 100_000_000 sats = 100_000_000_000 msat
_MSAT_PER_UNIT: dict[str, int] = {
    "": 100_000_000_000,
    "m": 100_000_000,
    "u": 100_000,
    "n": 100,
}


def parse_prefix(hrp: str) -> tuple[str, int | None]:
    """Split a human-readable prefix into currency and amount.

    Args:
        hrp: The invoice prefix, e.g. "lnbc2500u" or "lnbcrt".

    Returns:
        (currency, amount_msat). amount_msat is None for "any amount"
        invoices that carry no digits.

    Raises:
        FormatError: If the marker is missing or the amount is malformed.
        PrecisionError: If a pico amount is not a whole millisatoshi.
    """
    if not hrp.startswith(PREFIX_MARKER):
        raise FormatError(f"Invalid invoice prefix: {hrp!r}")

    rest = hrp[len(PREFIX_MARKER):]
    i = 0
    while i < len(rest) and not ("0" <= rest[i] <= "9"):
        i += 1
    currency = rest[:i]
    amount_part = rest[i:]

    if not amount_part:
        return currency, None

    match = _AMOUNT_RE.fullmatch(amount_part)
    if not match:
        raise FormatError(f"Invalid amount in prefix: {amount_part!r}")

    digits = int(match.group("digits"))
    multiplier = match.group("multiplier")

    if multiplier == "p":
        # 1 pico-BTC is a tenth of a millisatoshi
        if digits % 10:
            raise PrecisionError(amount_part)
        return currency, digits // 10

    return currency, digits * _MSAT_PER_UNIT[multiplier]
