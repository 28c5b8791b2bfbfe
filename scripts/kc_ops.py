"""Command-line front end for the Keycloak operation dispatcher.

Examples:
    python scripts/kc_ops.py list
    python scripts/kc_ops.py run GET_REALMS --token "$TOKEN"
    python scripts/kc_ops.py run CREATE_GROUP --params '{"realm": "demo", "groupName": "ops"}'
"""
from __future__ import annotations
import argparse
import os
import sys
from pathlib import Path

SCRIPT_DIR = Path(__file__).parent
PROJECT_ROOT = SCRIPT_DIR.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.config import load_settings
from app.core.discourse import DiscourseSearchService
from app.core.keycloak import KeycloakError, build_client
from app.core.operations import (
    CATALOG,
    Collaborators,
    Failure,
    OperationDispatcher,
    prepare,
)


def _print_catalog() -> None:
    for spec in CATALOG.values():
        fields = ", ".join(
            field.name if field.required else f"[{field.name}]" for field in spec.fields
        )
        print(f"{spec.operation.value:<40} {fields}")


def _fail(kind: str, message: str) -> int:
    print(f"[kc_ops] {kind}: {message}", file=sys.stderr)
    return 1


def main(argv: list[str] | None = None) -> int:
    """Command-line entry point."""
    parser = argparse.ArgumentParser(description="Keycloak operation dispatcher")
    parser.add_argument("--kc-url", default=None, help="Keycloak base URL (default: KC_URL)")
    parser.add_argument("--token", default=os.environ.get("KC_TOKEN"),
                        help="Admin access token (default: KC_TOKEN)")

    sub = parser.add_subparsers(dest="cmd")

    sub.add_parser("list", help="List operations and their fields")

    run = sub.add_parser("run", help="Run one operation")
    run.add_argument("operation")
    run.add_argument("--params", default=None, help="Parameter bag as a JSON object")

    args = parser.parse_args(argv)

    if not args.cmd:
        parser.print_help()
        return 0

    if args.cmd == "list":
        _print_catalog()
        return 0

    # Reject unknown operations and bad parameters before any login
    prepared = prepare(args.operation, args.params)
    if isinstance(prepared, Failure):
        return _fail(prepared.kind.value, prepared.message)

    cfg = load_settings()
    try:
        client = build_client(
            args.kc_url or cfg.keycloak_url,
            bearer_token=args.token,
            dev_user=cfg.dev_user,
            dev_password=cfg.dev_password,
            auth_realm=cfg.keycloak_realm,
            timeout=cfg.request_timeout,
        )
    except KeycloakError as exc:
        return _fail("AuthenticationError", str(exc))

    search = DiscourseSearchService(cfg.discourse_url, timeout=cfg.request_timeout)
    dispatcher = OperationDispatcher(Collaborators.from_client(client, search))

    envelope = dispatcher.run(prepared)
    if isinstance(envelope, Failure):
        return _fail(envelope.kind.value, envelope.message)

    print(envelope.payload)
    return 0


if __name__ == "__main__":
    sys.exit(main())
