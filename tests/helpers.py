"""Builders for synthetic BOLT11 invoices used across the tests."""

from __future__ import annotations

from bolt11_verify import bech32_codec

# Generated locally via CLN regtest (`lightning-cli invoice 1234msat ...`).
REGTEST_INVOICE = (
    "lnbcrt12340p1p5ct6ensp525myu22mhh03a2zr636tn59eahjhkprajmd2ppnl586qz27wvjxqpp5"
    "xkvweakdjc9m0rlxm3hhmfvz9hd6acjexfkuz06aeax0n2c7u0zqdq8v3jhxccxqyjw5qcqp29qxpqys"
    "gqtrheftp4lndgsjz80xx64sf3vfmtn7qzrtdha9mwxqg0mnqqz8hncgk9k3dzh48ftud92w4j4eskck"
    "044tdzpkl9ymrjf3hzsf6cjtgpupxvn0"
)
REGTEST_PAYMENT_HASH = "3598ecf6cd960bb78fe6dc6f7da5822ddbaee259326dc13f5dcf4cf9ab1ee3c4"

TIMESTAMP = 1_700_000_000
HASH_A = "ab" * 32
HASH_B = "cd" * 32


def int_to_words(value: int, length: int | None = None) -> list[int]:
    words: list[int] = []
    while value:
        words.insert(0, value & 31)
        value >>= 5
    if length is not None:
        words = [0] * (length - len(words)) + words
    return words


def tagged(tag_char: str, payload: list[int]) -> list[int]:
    n = len(payload)
    return [bech32_codec.CHARSET.index(tag_char), n // 32, n % 32] + list(payload)


def payment_hash_field(hash_hex: str) -> list[int]:
    return tagged("p", bech32_codec.bytes_to_words(bytes.fromhex(hash_hex)))


def expiry_field(seconds: int) -> list[int]:
    return tagged("x", int_to_words(seconds))


def build_invoice(
    hrp: str = "lnbc2500u",
    timestamp: int = TIMESTAMP,
    fields: list[list[int]] | None = None,
    signature_words: int = 104,
) -> str:
    words = int_to_words(timestamp, 7)
    for field in fields or []:
        words += field
    words += [0] * signature_words
    return bech32_codec.encode(hrp, words)
