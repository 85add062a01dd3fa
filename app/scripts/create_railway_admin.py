"""CLI utility to create or reset a railway administrator account."""

import argparse
import asyncio
import getpass
from typing import Optional

from app.core.config import get_settings
from app.core.exceptions import AppError
from app.core.logging import configure_logging, get_logger
from app.db.init import init_db
from app.services import users as user_service

log = get_logger(__name__)


def _parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Create a RAILWAY_ADMIN user, or re-activate one and reset its password."
    )
    parser.add_argument("--email", required=True)
    parser.add_argument("--name", default="Railway Admin")
    parser.add_argument(
        "--password",
        help="Password for the account. Prompted for when omitted.",
    )
    return parser.parse_args(argv)


async def _run(email: str, name: str, password: str) -> int:
    await init_db()
    try:
        user = await user_service.upsert_railway_admin(email, name, password)
    except AppError as exc:
        log.error("railway_admin_failed", error=exc.message, **exc.details)
        return 1
    log.info("railway_admin_ready", user_id=str(user.id), email=user.email)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    args = _parse_args(argv)
    configure_logging(debug=get_settings().debug)
    password = args.password or getpass.getpass("Password: ")
    if not password:
        log.error("railway_admin_failed", error="password must not be empty")
        return 2
    return asyncio.run(_run(args.email, args.name, password))


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
