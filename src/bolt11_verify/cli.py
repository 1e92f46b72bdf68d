"""Command-line entry points: ``bolt11-verify`` and ``promptctl``."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Sequence

from bolt11_verify.bolt11 import decode_invoice
from bolt11_verify.config import resolve_promptd_settings
from bolt11_verify.exceptions import DecodeError, PromptRequestError
from bolt11_verify.promptd import PromptClient
from bolt11_verify.verify import verify_invoice

_TRUE_VALUES = {"1", "true", "yes", "on"}


def parse_bool_flag(value: str) -> bool:
    """Interpret 1/true/yes/on (any case) as True, everything else as False."""
    return value.strip().lower() in _TRUE_VALUES


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2))


def _cmd_decode(args: argparse.Namespace) -> int:
    try:
        decoded = decode_invoice(args.invoice)
    except DecodeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    _print_json(decoded.to_dict())
    return 0


def _cmd_verify(args: argparse.Namespace) -> int:
    result = verify_invoice(
        args.invoice,
        payment_hash_hex=args.payment_hash,
        amount_msat=args.amount_msat,
        expires_at_unix=args.expires_at,
    )
    _print_json(result.to_dict())
    return 0 if result.ok else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bolt11-verify",
        description="Decode BOLT11 invoices and check them against an expected invoice body.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_decode = sub.add_parser("decode", help="Decode an invoice and print its fields as JSON")
    p_decode.add_argument("invoice", help="BOLT11 invoice string")
    p_decode.set_defaults(func=_cmd_decode)

    p_verify = sub.add_parser("verify", help="Verify an invoice against expected fields")
    p_verify.add_argument("invoice", help="BOLT11 invoice string")
    p_verify.add_argument("--payment-hash", help="Expected payment hash (hex)")
    p_verify.add_argument("--amount-msat", help="Expected amount in millisatoshis")
    p_verify.add_argument("--expires-at", help="Expected expiry as a unix timestamp")
    p_verify.set_defaults(func=_cmd_verify)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)
    return args.func(args)


def build_promptctl_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="promptctl",
        description="Submit a prompt to a promptd server.",
    )
    parser.add_argument("--url", help="promptd base URL (default: http://127.0.0.1:9333)")
    parser.add_argument("--auth-token", help="Bearer token, if promptd requires one")
    parser.add_argument("--prompt", required=True, help="Prompt text")
    parser.add_argument("--session-id", help="Session to continue")
    parser.add_argument("--auto-approve", type=parse_bool_flag, help="0|1")
    parser.add_argument("--dry-run", type=parse_bool_flag, help="0|1")
    parser.add_argument("--max-steps", type=int, help="Maximum agent steps")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable logging")
    return parser


def promptctl_main(argv: Sequence[str] | None = None) -> int:
    args = build_promptctl_parser().parse_args(argv)
    _setup_logging(args.verbose)

    if not args.prompt.strip():
        print("Missing --prompt", file=sys.stderr)
        return 1

    settings = resolve_promptd_settings(url=args.url, auth_token=args.auth_token)
    client = PromptClient(settings.url, auth_token=settings.auth_token)
    try:
        result = client.run(
            args.prompt,
            session_id=args.session_id,
            auto_approve=args.auto_approve,
            dry_run=args.dry_run,
            max_steps=args.max_steps,
        )
    except PromptRequestError as e:
        print(e, file=sys.stderr)
        return 1

    _print_json(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
