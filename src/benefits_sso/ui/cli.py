# ruff: noqa: T201

from __future__ import annotations

import argparse
import json
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv
from pydantic import ValidationError

from benefits_sso.adapters.saml import SamlResponse
from benefits_sso.app import authenticate, initialize_database
from benefits_sso.config import ConfigurationError, configure_logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from benefits_sso.domain.reconciliation import ReconciliationResult

log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_INVALID_INPUT = 2


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Benefits portal sign-in tools")
    subparsers = parser.add_subparsers(dest="command", required=True)

    reconcile = subparsers.add_parser(
        "reconcile",
        help="Reconcile a captured SAML response snapshot into a session",
    )
    reconcile.add_argument(
        "response",
        type=str,
        help="Path to a JSON snapshot with authn_context, attributes and errors",
    )

    init_db = subparsers.add_parser("init-db", help="Apply database migrations")
    init_db.add_argument(
        "--database-uri",
        type=str,
        help="Override DATABASE_URI for this run",
    )
    return parser.parse_args(list(argv))


def _load_response(path: str) -> SamlResponse:
    try:
        return SamlResponse.from_file(path)
    except OSError as exc:
        raise ValueError(f"Cannot read {path}: {exc.strerror}") from exc
    except ValidationError as exc:
        count = exc.error_count()
        raise ValueError(f"Invalid SAML response snapshot {path}: {count} error(s)") from exc


def _summarise(result: ReconciliationResult) -> dict[str, object]:
    summary: dict[str, object] = {
        "success": result.success,
        "is_new_login": result.is_new_login,
    }
    if result.session is not None:
        summary["principal_id"] = result.session.principal_id
        summary["session_token"] = result.session.token
    if result.diagnostic is not None:
        summary["failure_code"] = result.failure_code
        summary["instrumentation_tag"] = result.instrumentation_tag
        summary["message"] = result.diagnostic.message
    return summary


def main(argv: Sequence[str] | None = None) -> int:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        configure_logging()
        parsed_args = _parse_args(args_list)
        response = None
        if parsed_args.command == "reconcile":
            response = _load_response(parsed_args.response)
    except (ValueError, ConfigurationError):
        log.exception("CLI validation error")
        return EXIT_INVALID_INPUT

    try:
        if parsed_args.command == "init-db":
            initialize_database(database_uri=parsed_args.database_uri)
            return EXIT_OK
        if response is None:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
        result = authenticate(response)
    except Exception:
        log.exception("Fatal error during %s", parsed_args.command)
        return EXIT_FAILED

    print(json.dumps(_summarise(result), sort_keys=True))
    return EXIT_OK if result.success else EXIT_FAILED


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    sys.exit(main())


if __name__ == "__main__":
    run()
