"""
User administration from the command line.

There is no sign-up endpoint; accounts are created here.

Usage:
    python -m trip_planner.cli list
    python -m trip_planner.cli add <username> [--display-name NAME]
    python -m trip_planner.cli set-password <username>
    python -m trip_planner.cli delete <username>
"""

import argparse
import asyncio
import sys
from getpass import getpass
from typing import Callable, Optional, Sequence

from trip_planner.database import async_session_maker, close_db, init_db
from trip_planner.kernel.identity.identity_service import IdentityService

MIN_PASSWORD_LENGTH = 8


def prompt_password(prompt: Optional[Callable[[str], str]] = None) -> Optional[str]:
    """Ask for a password twice. Returns None when they differ or are too short."""
    prompt = prompt or getpass
    first = prompt("Password: ")
    second = prompt("Confirm: ")
    if first != second:
        print("Passwords do not match.")
        return None
    if len(first) < MIN_PASSWORD_LENGTH:
        print(f"Password must be at least {MIN_PASSWORD_LENGTH} characters.")
        return None
    return first


async def list_users() -> int:
    async with async_session_maker() as session:
        users = await IdentityService(session).list_users()
    if not users:
        print("No users found.")
        return 0
    print(f"{'ID':>4}  {'USERNAME':<20} DISPLAY NAME")
    for user in users:
        print(f"{user.id:>4}  {user.username:<20} {user.display_name or ''}")
    return 0


async def add_user(username: str, display_name: Optional[str]) -> int:
    password = prompt_password()
    if password is None:
        return 1
    async with async_session_maker() as session:
        try:
            await IdentityService(session).create_user(username, password, display_name)
        except ValueError as e:
            print(e)
            return 1
        await session.commit()
    print(f"Created user '{username}'")
    return 0


async def set_password(username: str) -> int:
    password = prompt_password()
    if password is None:
        return 1
    async with async_session_maker() as session:
        if not await IdentityService(session).set_password(username, password):
            print("User not found.")
            return 1
        await session.commit()
    print("Password updated.")
    return 0


async def delete_user(username: str) -> int:
    async with async_session_maker() as session:
        if not await IdentityService(session).delete_user(username):
            print("User not found.")
            return 1
        await session.commit()
    print(f"Deleted user '{username}' and all their data.")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="trip-planner", description="Manage trip planner users")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List users")

    add = sub.add_parser("add", help="Create a user")
    add.add_argument("username")
    add.add_argument("--display-name", default=None)

    pw = sub.add_parser("set-password", help="Change a user's password")
    pw.add_argument("username")

    rm = sub.add_parser("delete", help="Delete a user and everything they own")
    rm.add_argument("username")

    return parser


async def run(args: argparse.Namespace) -> int:
    await init_db()
    try:
        if args.command == "list":
            return await list_users()
        if args.command == "add":
            return await add_user(args.username, args.display_name)
        if args.command == "set-password":
            return await set_password(args.username)
        return await delete_user(args.username)
    finally:
        await close_db()


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
