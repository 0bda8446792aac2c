"""CLI for Estate Listings: create tables, bootstrap staff accounts."""

from __future__ import annotations

import argparse
import asyncio
import getpass
import sys


async def cmd_init_db(args):
    from app.db.engine import create_tables

    await create_tables()
    print("Tables created")


async def cmd_create_user(args):
    """Create a user with any role, including agent and admin."""
    from app.config import get_settings
    from app.db import crud
    from app.db.engine import async_session_factory, create_tables
    from app.errors import ConflictError
    from app.services.auth import hash_password

    await create_tables()

    password = args.password
    if not password:
        password = getpass.getpass("Password: ")
        confirm = getpass.getpass("Confirm password: ")
        if password != confirm:
            print("Passwords do not match")
            sys.exit(1)

    min_length = get_settings().auth.min_password_length
    if len(password) < min_length:
        print(f"Password must be at least {min_length} characters")
        sys.exit(1)

    async with async_session_factory() as db:
        try:
            user = await crud.create_user(
                db, args.email, hash_password(password),
                display_name=args.display_name, role=args.role,
            )
        except ConflictError as exc:
            print(exc.message)
            sys.exit(1)

    print(f"User created: {user.email} (id={user.id}, role={user.role})")


def main():
    parser = argparse.ArgumentParser(description="Estate Listings CLI")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("init-db", help="Create database tables")

    cu = subparsers.add_parser("create-user", help="Create a user account")
    cu.add_argument("--email", required=True, help="Login email")
    cu.add_argument("--role", default="admin", choices=["buyer", "seller", "agent", "admin"])
    cu.add_argument("--password", default="", help="Password (prompted if not given)")
    cu.add_argument("--display-name", default="", help="Display name")

    args = parser.parse_args()
    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == "init-db":
        asyncio.run(cmd_init_db(args))
    elif args.command == "create-user":
        asyncio.run(cmd_create_user(args))


if __name__ == "__main__":
    main()
