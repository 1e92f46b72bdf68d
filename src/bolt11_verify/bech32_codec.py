"""Bech32 (BIP-173) codec for Lightning invoices.

Only the original bech32 checksum constant is accepted; BOLT11 never uses
bech32m. Unlike segwit addresses, invoices routinely run to several hundred
characters, so the length limit is supplied by the caller instead of being
pinned at 90.

Reference: https://github.com/bitcoin/bips/blob/master/bip-0173.mediawiki
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

CHARSET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"
BECH32_CONST = 1
CHECKSUM_LENGTH = 6

_CHARSET_REV = {c: i for i, c in enumerate(CHARSET)}


class Bech32Error(ValueError):
    """String is not valid bech32."""


@dataclass(frozen=True)
class Bech32Data:
    """A decoded bech32 string with the checksum removed."""

    prefix: str
    words: tuple[int, ...]


def _polymod(values: Iterable[int]) -> int:
    gen = [0x3B6A57B2, 0x26508E6D, 0x1EA119FA, 0x3D4233DD, 0x2A1462B3]
    chk = 1
    for value in values:
        top = chk >> 25
        chk = (chk & 0x1FFFFFF) << 5 ^ value
        for i in range(5):
            chk ^= gen[i] if ((top >> i) & 1) else 0
    return chk


def _prefix_expand(prefix: str) -> list[int]:
    return [ord(x) >> 5 for x in prefix] + [0] + [ord(x) & 31 for x in prefix]


def _create_checksum(prefix: str, words: list[int]) -> list[int]:
    values = _prefix_expand(prefix) + words
    polymod = _polymod(values + [0] * CHECKSUM_LENGTH) ^ BECH32_CONST
    return [(polymod >> 5 * (5 - i)) & 31 for i in range(CHECKSUM_LENGTH)]


def _convertbits(
    data: Iterable[int], frombits: int, tobits: int, pad: bool
) -> list[int] | None:
    """General power-of-2 base conversion."""
    acc = 0
    bits = 0
    ret: list[int] = []
    maxv = (1 << tobits) - 1
    max_acc = (1 << (frombits + tobits - 1)) - 1
    for value in data:
        if value < 0 or (value >> frombits):
            return None
        acc = ((acc << frombits) | value) & max_acc
        bits += frombits
        while bits >= tobits:
            bits -= tobits
            ret.append((acc >> bits) & maxv)
    if pad:
        if bits:
            ret.append((acc << (tobits - bits)) & maxv)
    elif bits >= frombits or ((acc << (tobits - bits)) & maxv):
        return None
    return ret


def decode(text: str, max_length: int) -> Bech32Data:
    """Split a bech32 string into its prefix and 5-bit data words.

    Args:
        text: The bech32 string (all lowercase or all uppercase).
        max_length: Maximum accepted length of ``text``.

    Returns:
        The prefix and the data words, checksum stripped.

    Raises:
        Bech32Error: On bad length, case, alphabet, separator or checksum.
    """
    if len(text) > max_length:
        raise Bech32Error(f"Exceeds length limit of {max_length}")
    if len(text) < 8:
        raise Bech32Error(f"{text!r} too short")
    if any(ord(x) < 33 or ord(x) > 126 for x in text):
        raise Bech32Error("Invalid character outside printable ASCII")
    if text.lower() != text and text.upper() != text:
        raise Bech32Error("Mixed-case string")

    text = text.lower()
    pos = text.rfind("1")
    if pos < 1:
        raise Bech32Error("Missing prefix")
    if pos + 1 + CHECKSUM_LENGTH > len(text):
        raise Bech32Error("Data too short")

    prefix = text[:pos]
    words = []
    for ch in text[pos + 1:]:
        word = _CHARSET_REV.get(ch)
        if word is None:
            raise Bech32Error(f"Unknown character {ch!r}")
        words.append(word)

    if _polymod(_prefix_expand(prefix) + words) != BECH32_CONST:
        raise Bech32Error(f"Invalid checksum for {text[:20]}...")

    return Bech32Data(prefix=prefix, words=tuple(words[:-CHECKSUM_LENGTH]))


def encode(prefix: str, words: Sequence[int]) -> str:
    """Encode a prefix and 5-bit words into a checksummed bech32 string."""
    data = list(words)
    if any(w < 0 or w > 31 for w in data):
        raise Bech32Error("Word out of 5-bit range")
    combined = data + _create_checksum(prefix, data)
    return prefix + "1" + "".join(CHARSET[d] for d in combined)


def words_to_bytes(words: Sequence[int]) -> bytes:
    """Regroup 5-bit words into bytes.

    Leftover bits must number fewer than five and all be zero.

    Raises:
        Bech32Error: If the padding is invalid or a word is out of range.
    """
    converted = _convertbits(words, 5, 8, pad=False)
    if converted is None:
        raise Bech32Error("Invalid padding in 5-bit data")
    return bytes(converted)


def bytes_to_words(data: bytes) -> list[int]:
    """Regroup bytes into 5-bit words, zero-padding the last word.

    Raises:
        Bech32Error: If a value does not fit in a byte.
    """
    converted = _convertbits(data, 8, 5, pad=True)
    if converted is None:
        raise Bech32Error("Byte value out of range")
    return converted
