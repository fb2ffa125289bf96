#!/usr/bin/env python3
"""
Dev helper: send a test contact-form submission to a running backend.

Usage
-----
# Basic: sample submission to localhost:8000
python scripts/send_test_contact.py

# Custom fields
python scripts/send_test_contact.py --name "Ada" --email ada@example.com \
    --subject "Project inquiry" --message "Hello there"

# Target a deployed endpoint
python scripts/send_test_contact.py --url https://example.vercel.app/api/contact

# Send a CORS preflight instead of a submission
python scripts/send_test_contact.py --preflight

# Print the payload without sending it
python scripts/send_test_contact.py --dry-run

Note that a successful run sends real email through Resend when the backend
is configured with a live RESEND_API_KEY.

CONTACT_ENDPOINT_URL in the environment or a .env file in the project root
overrides the default --url.
"""

import argparse
import json
import os
import sys
import textwrap
from pathlib import Path

import httpx
from dotenv import load_dotenv

DEFAULT_URL = "http://localhost:8000/api/contact"


# ---------------------------------------------------------------------------
# Payload
# ---------------------------------------------------------------------------

def build_payload(name: str, email: str, subject: str, message: str) -> dict:
    """Build the JSON body the contact endpoint expects."""
    return {
        "name": name,
        "email": email,
        "subject": subject,
        "message": message,
    }


# ---------------------------------------------------------------------------
# Pretty printer
# ---------------------------------------------------------------------------

def _print_response(response: httpx.Response) -> None:
    status = response.status_code
    symbol = "OK" if response.is_success else "FAIL"
    print(f"\n[{symbol}] HTTP {status}")
    for header in ("access-control-allow-origin", "access-control-allow-methods"):
        if header in response.headers:
            print(f"{header}: {response.headers[header]}")
    if not response.content:
        return
    try:
        print(json.dumps(response.json(), indent=2))
    except ValueError:
        print(response.text)


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="send_test_contact.py",
        description="Send a test contact-form submission to the backend.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""\
            Examples:
              python scripts/send_test_contact.py
              python scripts/send_test_contact.py --url http://localhost:8000/
              python scripts/send_test_contact.py --preflight
        """),
    )
    parser.add_argument(
        "--url",
        default=os.getenv("CONTACT_ENDPOINT_URL", DEFAULT_URL),
        help=f"Contact endpoint URL (default: CONTACT_ENDPOINT_URL or {DEFAULT_URL})",
    )
    parser.add_argument("--name", default="Test Visitor", help="Submitter name")
    parser.add_argument(
        "--email",
        default="visitor@example.com",
        help="Submitter email; receives the auto-reply (default: visitor@example.com)",
    )
    parser.add_argument("--subject", default="Test message", help="Message subject")
    parser.add_argument(
        "--message",
        default="Hello!\nThis is a test submission.",
        help="Message body; newlines are preserved",
    )
    parser.add_argument(
        "--preflight",
        action="store_true",
        help="Send an OPTIONS request instead of a submission.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the payload JSON without sending it.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    # scripts/ lives one level below the project root
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env")

    args = build_parser().parse_args(argv)

    payload = build_payload(args.name, args.email, args.subject, args.message)

    print(f"Endpoint : {args.url}")

    if args.dry_run:
        print("\n[DRY RUN] Payload:")
        print(json.dumps(payload, indent=2))
        return 0

    try:
        if args.preflight:
            response = httpx.options(args.url, timeout=30.0)
        else:
            print(f"From     : {args.name} <{args.email}>")
            print(f"Subject  : {args.subject}")
            response = httpx.post(args.url, json=payload, timeout=30.0)
    except httpx.HTTPError as exc:
        print(f"ERROR: Could not reach {args.url}: {exc}", file=sys.stderr)
        return 1

    _print_response(response)
    return 0 if response.is_success else 1


if __name__ == "__main__":
    sys.exit(main())
