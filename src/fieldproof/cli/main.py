#!/usr/bin/env python3
"""
fieldproof CLI - check profile field values for verification eligibility.

Commands:
  fieldproof check <value>          Classify a single field value
  fieldproof inspect <profile.json> Show verification state of a profile's fields
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from ..core.config import get_config
from ..core.exceptions import FieldproofException
from ..core.logging import configure_logging, correlation_context
from ..identity.profile import Profile
from ..verification.eligibility import classify

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INELIGIBLE = 1
EXIT_BAD_INPUT = 2


def output_result(data: dict[str, Any], as_json: bool, text: str) -> None:
    """Print ``data`` as JSON or ``text`` as-is."""
    if as_json:
        print(json.dumps(data, indent=2, default=str))
    else:
        print(text)


def output_error(message: str) -> None:
    """Print error message to stderr."""
    print(f"Error: {message}", file=sys.stderr)


def cmd_check(args: argparse.Namespace) -> int:
    """Classify one value as a local (plain text) or remote (HTML) field value."""
    is_local = not args.remote
    result = classify(args.value, is_local)

    if result.eligible:
        text = f"eligible: {result.url}"
    else:
        text = f"ineligible: {result.reason}"

    output_result({**result.to_dict(), "local": is_local}, args.json, text)
    return EXIT_OK if result.eligible else EXIT_INELIGIBLE


def cmd_inspect(args: argparse.Namespace) -> int:
    """Load a profile JSON file and report each field's verification state."""
    path = Path(args.path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise FieldproofException("Profile file must contain a JSON object")
        profile = Profile.from_dict(data)
        fields = profile.fields
    except (OSError, json.JSONDecodeError) as e:
        output_error(f"Cannot read {path}: {e}")
        return EXIT_BAD_INPUT
    except FieldproofException as e:
        output_error(e.message)
        return EXIT_BAD_INPUT

    rows = []
    for f in fields:
        eligibility = f.eligibility()
        rows.append(
            {
                **f.to_dict(),
                "verified": f.is_verified,
                "verifiable": eligibility.eligible,
                "reason": eligibility.reason.value if eligibility.reason else None,
            }
        )

    lines = [f"{profile.handle} ({'local' if profile.is_local else 'remote'})"]
    for row in rows:
        state = "verified" if row["verified"] else ("verifiable" if row["verifiable"] else f"not verifiable ({row['reason']})")
        lines.append(f"  {row['name']}: {row['value']}  [{state}]")
    if not rows:
        lines.append("  (no fields)")

    output_result({"handle": profile.handle, "is_local": profile.is_local, "fields": rows}, args.json, "\n".join(lines))
    return EXIT_OK


def app() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="fieldproof",
        description="Check profile field values for link verification eligibility",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  fieldproof check https://example.com                   Local plain-text value
  fieldproof check --remote '<a href="...">...</a>'      Remote HTML value
  fieldproof inspect profile.json --json                 All fields of a profile
        """,
    )
    parser.add_argument("--json", action="store_true", help="Output JSON")
    parser.add_argument("--log-level", default=None, help="Log level (default: FIELDPROOF_LOG_LEVEL or INFO)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser("check", help="Classify a single field value")
    check_parser.add_argument("value", help="Field value")
    check_parser.add_argument("--remote", "-r", action="store_true", help="Treat the value as remote HTML")
    check_parser.set_defaults(func=cmd_check)

    inspect_parser = subparsers.add_parser("inspect", help="Show verification state of a profile's fields")
    inspect_parser.add_argument("path", help="Profile JSON file ({handle, is_local, fields})")
    inspect_parser.set_defaults(func=cmd_inspect)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = app()
    args = parser.parse_args(argv)

    try:
        get_config()
    except FieldproofException as e:
        output_error(e.message)
        return EXIT_BAD_INPUT

    configure_logging(level=args.log_level)

    with correlation_context():
        logger.debug(f"Running command: {args.command}")
        return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
