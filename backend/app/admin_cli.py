"""Administrative command-line tool for soft-deleted clients.

Talks to the database directly and bypasses the deletion filter, so it is
the only way to inspect or restore a deleted client. It is deliberately
not exposed through the HTTP API.

Examples:
  client-registry-admin show 12
  client-registry-admin list --column name --search silva
  client-registry-admin restore 12
"""

import argparse
import asyncio
import json
import logging
import sys

from sqlalchemy.exc import SQLAlchemyError

from app.application.schemas.client import ClientAdminView
from app.application.services import ClientAdminService
from app.domain.exceptions import EntityNotFoundError, StoreError, ValidationError
from app.infrastructure.database.repositories import SQLAlchemyClientRepository
from app.infrastructure.database.session import async_session_factory
from app.infrastructure.logging.log_config import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="client-registry-admin",
        description="Inspect and restore soft-deleted clients",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__.split("Examples:", 1)[1],
    )
    commands = parser.add_subparsers(dest="command", required=True)

    show = commands.add_parser("show", help="Show one client, deleted or not")
    show.add_argument("client_id", type=int)

    listing = commands.add_parser("list", help="List clients including deleted ones")
    listing.add_argument("--page", type=int, default=1)
    listing.add_argument("--page-size", type=int, default=20)
    listing.add_argument("--column", default=None, help="name, address or phone")
    listing.add_argument("--search", default=None)

    restore = commands.add_parser("restore", help="Undo the soft delete of a client")
    restore.add_argument("client_id", type=int)

    return parser


def _dump(client) -> dict:
    return ClientAdminView.model_validate(client, from_attributes=True).model_dump(mode="json")


async def run(args: argparse.Namespace) -> dict:
    """Execute one admin command in its own unit of work."""
    async with async_session_factory() as session:
        service = ClientAdminService(SQLAlchemyClientRepository(session))

        if args.command == "show":
            return _dump(await service.get_client(args.client_id))

        if args.command == "list":
            result = await service.list_clients(
                page=args.page,
                page_size=args.page_size,
                filter_column=args.column,
                filter_text=args.search,
            )
            return {
                "items": [_dump(c) for c in result.items],
                "total": result.total,
                "page": result.page,
                "page_size": result.page_size,
            }

        restored = await service.restore_client(args.client_id)
        try:
            await session.commit()
        except SQLAlchemyError as exc:
            raise StoreError("commit", str(exc)) from exc
        return _dump(restored)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging()

    try:
        output = asyncio.run(run(args))
    except EntityNotFoundError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except ValidationError as exc:
        print(f"Invalid arguments: {exc}", file=sys.stderr)
        return 2
    except StoreError as exc:
        logger.error("Store unavailable: %s", exc)
        return 3

    print(json.dumps(output, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
