"""
Minimal script that walks a payment intent from creation to capture.
"""

from __future__ import annotations

import argparse
import logging
import sys

from stripe_resources import (
    CaptureMethod,
    ConfigError,
    Currency,
    Metadata,
    PaymentIntent,
    PaymentIntentConfirmParams,
    PaymentIntentCreateParams,
    PaymentIntentStatus,
    StripeError,
    create_client,
    load_client_config,
)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create, confirm and capture a payment intent")
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing STRIPE_* settings",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    parser.add_argument("--amount", type=int, default=1000, help="Amount in the smallest currency unit")
    parser.add_argument("--currency", default="usd", help="Three-letter currency code (default: usd)")
    parser.add_argument(
        "--source",
        default="tok_visa",
        help="Payment source to confirm with (default: the tok_visa test token)",
    )
    parser.add_argument("--order-id", help="Recorded in the intent's metadata")
    parser.add_argument(
        "--cancel",
        action="store_true",
        help="Cancel the intent instead of capturing it",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        config = load_client_config(env_file=args.env_file)
    except (ConfigError, ValueError) as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    client = create_client(config=config)
    metadata = Metadata(order_id=args.order_id) if args.order_id else None

    try:
        intent = PaymentIntent.create(
            client,
            PaymentIntentCreateParams(
                amount=args.amount,
                currency=Currency(args.currency),
                allowed_source_types=("card",),
                capture_method=CaptureMethod.MANUAL,
                metadata=metadata,
            ),
        )
        logging.info("Created %s with status %s", intent.id, intent.status)

        if args.cancel:
            intent = PaymentIntent.cancel(client, intent.id)
            logging.info("Canceled %s", intent.id)
            return 0

        intent = PaymentIntent.confirm(
            client, intent.id, PaymentIntentConfirmParams(source=args.source)
        )
        if intent.status is not PaymentIntentStatus.REQUIRES_CAPTURE:
            logging.error("Intent %s cannot be captured in status %s", intent.id, intent.status)
            return 1

        intent = PaymentIntent.capture(client, intent.id)
    except StripeError as exc:
        logging.error("Request failed: %s", exc)
        return 1

    logging.info("Captured %s: %s %s received", intent.id, intent.amount_received, intent.currency)
    return 0


if __name__ == "__main__":
    sys.exit(main())
