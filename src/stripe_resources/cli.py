"""
Command-line interface for inspecting payment intents and payouts.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Callable, Iterable, Optional, Sequence, TextIO, Tuple

import requests

from .api import create_client
from .core.client import Transport
from .core.config import ConfigError, load_client_config
from .core.errors import RequestError, StripeError
from .core.pagination import PagedList
from .core.params import RangeQuery
from .resources.payment_intent import (
    CancellationReason,
    PaymentIntent,
    PaymentIntentListParams,
)
from .resources.payout import Payout, PayoutListParams, PayoutStatus


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )


def _env_override(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Overrides must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Override key must not be empty")
    return key, val


def _collect_overrides(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for key, value in pairs:
        overrides[key] = value
    return overrides


def _page_size(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Expected an integer, got '{value}'") from exc
    if not 1 <= number <= 100:
        raise argparse.ArgumentTypeError("Page size must be between 1 and 100")
    return number


def _range(gte: Optional[int], lte: Optional[int]) -> Optional[RangeQuery[int]]:
    query = RangeQuery(gte=gte, lte=lte)
    return None if query.is_empty() else query


def _add_list_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--limit", type=_page_size, help="Page size (1-100)")
    parser.add_argument("--created-gte", type=int, metavar="TS", help="Created at or after TS")
    parser.add_argument("--created-lte", type=int, metavar="TS", help="Created at or before TS")
    parser.add_argument(
        "--all",
        action="store_true",
        help="Follow pagination cursors until the listing is exhausted",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stripe-resources",
        description="Inspect and manage payment intents and payouts",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing STRIPE_* settings (default: .env)",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_env_override,
        metavar="KEY=VALUE",
        default=None,
        help="Override an environment variable without editing the .env file",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Python logging level (default: WARNING)",
    )

    resources = parser.add_subparsers(dest="resource", required=True)

    intents = resources.add_parser("payment-intents", help="Payment intent requests")
    intent_actions = intents.add_subparsers(dest="action", required=True)
    intent_list = intent_actions.add_parser("list", help="List payment intents")
    _add_list_arguments(intent_list)
    intent_list.add_argument("--customer", help="Only intents for this customer")
    intent_actions.add_parser("retrieve", help="Retrieve one payment intent").add_argument("id")
    intent_cancel = intent_actions.add_parser("cancel", help="Cancel a payment intent")
    intent_cancel.add_argument("id")
    intent_cancel.add_argument(
        "--reason",
        choices=[reason.value for reason in CancellationReason],
        help="Cancellation reason recorded on the intent",
    )

    payouts = resources.add_parser("payouts", help="Payout requests")
    payout_actions = payouts.add_subparsers(dest="action", required=True)
    payout_list = payout_actions.add_parser("list", help="List payouts")
    _add_list_arguments(payout_list)
    payout_list.add_argument(
        "--status",
        choices=[status.value for status in PayoutStatus],
        help="Only payouts with this status",
    )
    payout_actions.add_parser("retrieve", help="Retrieve one payout").add_argument("id")
    payout_actions.add_parser("cancel", help="Cancel a pending payout").add_argument("id")
    return parser


def _emit(record: Any, out: TextIO) -> None:
    out.write(json.dumps(record.raw, sort_keys=True) + "\n")


def _emit_listing(
    page: PagedList,
    transport: Transport,
    params: Any,
    follow: bool,
    out: TextIO,
) -> None:
    records = page.auto_paging_iter(transport, params) if follow else iter(page)
    for record in records:
        _emit(record, out)


def _run_payment_intents(args: argparse.Namespace, transport: Transport, out: TextIO) -> None:
    if args.action == "list":
        params = PaymentIntentListParams(
            created=_range(args.created_gte, args.created_lte),
            customer=args.customer,
            limit=args.limit,
        )
        page = PaymentIntent.list(transport, params)
        _emit_listing(page, transport, params, args.all, out)
    elif args.action == "retrieve":
        _emit(PaymentIntent.retrieve(transport, args.id), out)
    elif args.action == "cancel":
        reason = CancellationReason(args.reason) if args.reason else None
        _emit(PaymentIntent.cancel(transport, args.id, reason), out)


def _run_payouts(args: argparse.Namespace, transport: Transport, out: TextIO) -> None:
    if args.action == "list":
        params = PayoutListParams(
            created=_range(args.created_gte, args.created_lte),
            limit=args.limit,
            status=PayoutStatus(args.status) if args.status else None,
        )
        page = Payout.list(transport, params)
        _emit_listing(page, transport, params, args.all, out)
    elif args.action == "retrieve":
        _emit(Payout.retrieve(transport, args.id), out)
    elif args.action == "cancel":
        _emit(Payout.cancel(transport, args.id), out)


_HANDLERS: dict[str, Callable[[argparse.Namespace, Transport, TextIO], None]] = {
    "payment-intents": _run_payment_intents,
    "payouts": _run_payouts,
}


def run_cli(
    argv: Sequence[str] | None = None,
    *,
    transport: Optional[Transport] = None,
    out: Optional[TextIO] = None,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    out = out if out is not None else sys.stdout

    _configure_logging(args.log_level)
    overrides = _collect_overrides(args.set or ())

    if transport is None:
        try:
            config = load_client_config(env_file=args.env_file, overrides=overrides)
        except (ConfigError, ValueError) as exc:
            logging.error("Invalid configuration: %s", exc)
            return 1
        transport = create_client(config=config, session=requests.Session())

    try:
        _HANDLERS[args.resource](args, transport, out)
    except StripeError as exc:
        logging.error("Request failed: %s", exc)
        return 1
    except RequestError as exc:
        logging.error("Invalid request: %s", exc)
        return 1
    return 0


def main() -> None:
    sys.exit(run_cli())
