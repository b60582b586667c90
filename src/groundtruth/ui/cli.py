# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

import uvicorn
from dotenv import load_dotenv

from groundtruth.app import (
    associate_contact,
    disassociate_contact,
    fetch_contacts,
    fetch_zip_codes,
)
from groundtruth.config import ConfigurationError, configure_logging, get_server_config
from groundtruth.web import create_app

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Browse and relate HubSpot zip codes and contacts")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the web application")
    serve.add_argument("--host", type=str, help="Interface to bind (defaults to HOST or 127.0.0.1)")
    serve.add_argument("--port", type=int, help="Port to bind (defaults to PORT or 3000)")

    subparsers.add_parser("zip-codes", help="List zip code records and their contact")
    subparsers.add_parser("contacts", help="List contacts")

    associate = subparsers.add_parser(
        "associate",
        help="Associate a contact with a zip code, replacing any previous one",
    )
    associate.add_argument("--contact-id", type=str, required=True, help="Contact record id")
    associate.add_argument("--zip-code-id", type=str, default="", help="Zip code record id")

    disassociate = subparsers.add_parser(
        "disassociate",
        help="Remove the association between a contact and a zip code",
    )
    disassociate.add_argument("--contact-id", type=str, required=True, help="Contact record id")
    disassociate.add_argument("--zip-code-id", type=str, default="", help="Zip code record id")

    return parser.parse_args(list(argv))


def _serve(args: argparse.Namespace) -> None:
    server = get_server_config()
    app = create_app(server=server)
    uvicorn.run(app, host=args.host or server.host, port=args.port or server.port)


def _print_zip_codes() -> None:
    for listing in fetch_zip_codes():
        properties = listing.record.properties
        contact = ""
        if listing.contact is not None:
            first = listing.contact.get("firstname") or ""
            last = listing.contact.get("lastname") or ""
            contact = f"{first} {last}".strip()
        print(
            f"{listing.record.id}\t{listing.name}\t{properties.get('homeownership_rate')}"
            f"\t{properties.get('median_home_age')}\t{contact}"
        )


def _print_contacts() -> None:
    for record in fetch_contacts():
        first = record.get("firstname") or ""
        last = record.get("lastname") or ""
        name = f"{first} {last}".strip()
        print(f"{record.id}\t{name}\t{record.get('email') or ''}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)

    try:
        if parsed_args.command == "serve":
            _serve(parsed_args)
        elif parsed_args.command == "zip-codes":
            _print_zip_codes()
        elif parsed_args.command == "contacts":
            _print_contacts()
        elif parsed_args.command == "associate":
            result = associate_contact(parsed_args.contact_id, parsed_args.zip_code_id)
            if not result.succeeded:
                log.error("Association failed: %s", result.error)
                sys.exit(1)
        elif parsed_args.command == "disassociate":
            result = disassociate_contact(parsed_args.contact_id, parsed_args.zip_code_id)
            if not result.succeeded:
                log.error("Removing association failed: %s", result.error)
                sys.exit(1)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except ConfigurationError:
        log.exception("Refusing to start: configuration is incomplete")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
