"""Word packing and tagged-field scanning for the BOLT11 data part.

The data part between the 7-word timestamp and the 104-word signature is a
sequence of tagged fields:

    tag (1 word) | length (2 words, big-endian) | payload (length words)

Only the payment hash and expiry are interpreted. Every other tag is
stepped over so that invoices carrying newer fields still decode.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from bolt11_verify import bech32_codec
from bolt11_verify.exceptions import FieldOverflowError, FormatError, TruncationError

log = logging.getLogger(__name__)

TIMESTAMP_WORDS = 7
SIGNATURE_WORDS = 104  # 65-byte signature = 520 bits
MAX_SAFE_INTEGER = 2**53 - 1

# sha256 digest: 256 bits padded to 260 = 52 words
PAYMENT_HASH_WORDS = 52


class Tag(str, Enum):
    """Tagged fields this package interprets, by bech32 character."""

    PAYMENT_HASH = "p"
    EXPIRY = "x"


_KNOWN_TAGS = {tag.value: tag for tag in Tag}


@dataclass(frozen=True)
class TaggedFields:
    """Values extracted from the tagged fields of one invoice."""

    payment_hash_hex: str | None = None
    expiry_seconds: int | None = None


def pack_words(words: Sequence[int]) -> int:
    """Pack 5-bit words into one big-endian integer.

    No upper bound is applied; callers limit how many words they pass.
    """
    value = 0
    for word in words:
        if not 0 <= word <= 31:
            raise ValueError(f"Not a 5-bit word: {word}")
        value = (value << 5) | word
    return value


def scan_tagged_fields(
    words: Sequence[int],
    start: int = TIMESTAMP_WORDS,
    end: int | None = None,
) -> TaggedFields:
    """Walk the tagged fields in ``words[start:end]``.

    ``end`` defaults to the start of the signature block. If a tag repeats,
    the last occurrence wins.

    Raises:
        TruncationError: If a header or payload runs past ``end``.
        FormatError: If a payment hash has non-zero padding bits.
        FieldOverflowError: If the expiry exceeds 2**53 - 1.
    """
    if end is None:
        end = len(words) - SIGNATURE_WORDS

    payment_hash_hex: str | None = None
    expiry_seconds: int | None = None

    idx = start
    while idx < end:
        if idx + 3 > end:
            raise TruncationError("Truncated tagged field header")

        # Every 5-bit value indexes the 32-character alphabet
        tag_char = bech32_codec.CHARSET[words[idx]]
        length = words[idx + 1] * 32 + words[idx + 2]
        idx += 3

        if idx + length > end:
            raise TruncationError(f"Truncated tagged field data for {tag_char!r}")
        payload = words[idx:idx + length]
        idx += length

        tag = _KNOWN_TAGS.get(tag_char)
        if tag is Tag.PAYMENT_HASH:
            if length != PAYMENT_HASH_WORDS:
                raise FormatError(
                    f"Invalid payment hash length: {length} words, expected {PAYMENT_HASH_WORDS}"
                )
            try:
                payment_hash_hex = bech32_codec.words_to_bytes(payload).hex()
            except bech32_codec.Bech32Error as e:
                raise FormatError(f"Invalid payment hash: {e}") from e
        elif tag is Tag.EXPIRY:
            expiry = pack_words(payload)
            if expiry > MAX_SAFE_INTEGER:
                raise FieldOverflowError("expiry", expiry)
            expiry_seconds = expiry
        else:
            log.debug("Skipping tagged field %r (%d words)", tag_char, length)

    return TaggedFields(
        payment_hash_hex=payment_hash_hex,
        expiry_seconds=expiry_seconds,
    )
