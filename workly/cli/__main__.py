"""
Workly CLI - local tooling for the Workly app.

Usage:
    workly login EMAIL
    workly logout
    workly profile show USER_ID [--json]
    workly profile clear USER_ID
    workly avatar upload USER_ID FILE
    workly shell-config [--output PATH]
"""

import argparse
import asyncio
import getpass
import json
import logging
import mimetypes
import sys
from pathlib import Path

from workly.auth import get_current_user, login, logout
from workly.client import create_workly_client
from workly.logout import run_logout_flow
from workly.profile_cache import clear_cached_profile, load_cached_profile, save_cached_profile
from workly.shell import ShellConfig
from workly.storage import SQLiteKeyValueStore
from workly.uploads import upload_avatar_and_get_public_url

logging.basicConfig(level=logging.WARNING)
logger = logging.getLogger(__name__)


def cmd_login(args, store):
    client = create_workly_client(store=store)
    password = args.password or getpass.getpass("Password: ")
    user = login(client, args.email, password)
    save_cached_profile(store, user)
    print(f"Signed in as {user.name} <{user.email}> ({user.role.value})")


def cmd_logout(args, store):
    client = create_workly_client(store=store)
    user = get_current_user(client)

    def _logout():
        logout(client)
        if user:
            clear_cached_profile(store, user.id)

    asyncio.run(
        run_logout_flow(_logout, on_status=print, navigate=lambda path: print(f"-> {path}"))
    )


def cmd_profile(args, store):
    if args.profile_action == "show":
        user = load_cached_profile(store, args.user_id)
        if user is None:
            print(f"No cached profile for {args.user_id}")
            return
        if args.json:
            print(json.dumps(user.to_dict(), indent=2))
            return
        print(f"{user.name} <{user.email}>")
        print(f"  role: {user.role.value}  language: {user.language}")
        if user.phone:
            print(f"  phone: {user.phone}")
        if user.specialties:
            print(f"  specialties: {', '.join(user.specialties)}")
        print(f"  completed requests: {user.completed_requests}")
    elif args.profile_action == "clear":
        clear_cached_profile(store, args.user_id)
        print(f"Cleared cached profile for {args.user_id}")


def cmd_avatar(args, store):
    path = Path(args.file)
    content_type, _ = mimetypes.guess_type(path.name)
    client = create_workly_client(store=store)
    url = upload_avatar_and_get_public_url(
        client, args.user_id, path.name, path.read_bytes(), content_type
    )
    print(url)


def cmd_shell_config(args, store):
    config = ShellConfig()
    if args.output:
        config.write(Path(args.output))
        print(f"Wrote {args.output}")
    else:
        print(json.dumps(config.to_dict(), indent=2))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="workly", description="Workly client tools")
    parser.add_argument("--db", help="Path to the local preferences database", default=None)
    parser.add_argument("--verbose", "-v", action="store_true")

    subparsers = parser.add_subparsers(dest="command", required=True)

    p_login = subparsers.add_parser("login", help="Sign in and cache your profile")
    p_login.add_argument("email")
    p_login.add_argument("--password", help="Password (prompted when omitted)")

    subparsers.add_parser("logout", help="Sign out")

    p_profile = subparsers.add_parser("profile", help="Cached profile operations")
    profile_sub = p_profile.add_subparsers(dest="profile_action", required=True)
    pr_show = profile_sub.add_parser("show", help="Show a cached profile")
    pr_show.add_argument("user_id")
    pr_show.add_argument("--json", "-j", action="store_true")
    pr_clear = profile_sub.add_parser("clear", help="Remove a cached profile")
    pr_clear.add_argument("user_id")

    p_avatar = subparsers.add_parser("avatar", help="Avatar operations")
    avatar_sub = p_avatar.add_subparsers(dest="avatar_action", required=True)
    av_upload = avatar_sub.add_parser("upload", help="Upload a new avatar")
    av_upload.add_argument("user_id")
    av_upload.add_argument("file")

    p_shell = subparsers.add_parser("shell-config", help="Print or write the native shell config")
    p_shell.add_argument("--output", "-o", help="Write JSON to this path")

    return parser


COMMANDS = {
    "login": cmd_login,
    "logout": cmd_logout,
    "profile": cmd_profile,
    "avatar": cmd_avatar,
    "shell-config": cmd_shell_config,
}


def main(argv=None):
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.getLogger("workly").setLevel(logging.DEBUG)

    try:
        store = SQLiteKeyValueStore(Path(args.db) if args.db else None)
        COMMANDS[args.command](args, store)
    except (ValueError, TypeError) as e:
        logger.error(f"Input validation error: {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Command failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
