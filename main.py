"""Command-line interface for the user directory service."""

from __future__ import annotations
import argparse
import logging
import os
import sys
from typing import Sequence

import httpx

from userservice.config import Settings, load_settings

logger = logging.getLogger("userservice.main")

ENDPOINTS = (
    ("POST", "/users", "Create a new user"),
    ("GET", "/users/:id", "Get user by ID"),
    ("GET", "/users", "Get all users"),
    ("GET", "/health", "Health check"),
)


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="User directory service utilities")
    subparsers = parser.add_subparsers(dest="command")

    parser.set_defaults(command="serve")

    serve_parser = subparsers.add_parser("serve", help="Start the HTTP service")
    serve_parser.add_argument("--host", default=None, help="Bind address (default: HOST or 0.0.0.0)")
    serve_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Listening port (default: PORT or 3000)",
    )

    list_parser = subparsers.add_parser("list-users", help="List users held by a running service")
    list_parser.add_argument(
        "--service-url",
        default=None,
        help="Base URL of a running service (default: USERSERVICE_URL or http://localhost:<port>)",
    )

    create_parser = subparsers.add_parser("create-user", help="Create a user on a running service")
    create_parser.add_argument("--name", required=True, help="Display name for the new user")
    create_parser.add_argument("--email", required=True, help="Unique email address")
    create_parser.add_argument(
        "--service-url",
        default=None,
        help="Base URL of a running service (default: USERSERVICE_URL or http://localhost:<port>)",
    )

    args_list = list(argv) if argv is not None else sys.argv[1:]
    known_commands = {"serve", "list-users", "create-user"}

    if not args_list:
        args_list = ["serve"]
    else:
        first = args_list[0]
        if first in ("-h", "--help"):
            return parser.parse_args(args_list)
        if first not in known_commands:
            if any(flag in args_list for flag in ("-h", "--help")):
                return parser.parse_args(args_list)
            args_list = ["serve", *args_list]

    return parser.parse_args(args_list)


def _resolve_service_url(explicit: str | None, settings: Settings) -> str:
    url = explicit or os.getenv("USERSERVICE_URL") or f"http://localhost:{settings.port}"
    return url.rstrip("/")


def _serve(*, settings: Settings, host: str | None, port: int | None) -> None:
    from userservice.api import create_app
    import uvicorn

    bind_host = host if host is not None else settings.host
    bind_port = port if port is not None else settings.port

    app = create_app(settings=settings)

    logger.info("Server is running on http://localhost:%s", bind_port)
    logger.info("Available endpoints:")
    for method, path, summary in ENDPOINTS:
        logger.info("  %s %s - %s", method, path, summary)

    uvicorn.run(
        app,
        host=bind_host,
        port=bind_port,
        log_level=settings.log_level.lower(),
    )


def _error_text(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text.strip()
    if isinstance(payload, dict) and "message" in payload:
        return f"{payload.get('error', 'Error')}: {payload['message']}"
    return response.text.strip()


def _list_users(service_url: str) -> int:
    try:
        response = httpx.get(f"{service_url}/users", timeout=10.0)
    except httpx.HTTPError as exc:
        print(f"Failed to contact user service: {exc}")
        return 1

    if response.status_code != 200:
        print(f"Service responded with {response.status_code}: {_error_text(response)}")
        return 1

    try:
        users = response.json()
    except ValueError:
        print("Service returned an unexpected response format.")
        return 1

    if not users:
        print("No users are currently registered.")
        return 0

    print(f"{len(users)} user(s) found:")
    print(f"{'ID':<36}  {'Name':<24}  {'Email':<32}  Created")
    print("-" * 120)
    for user in users:
        print(
            f"{user.get('id', '?'):<36}  {user.get('name', ''):<24}  "
            f"{user.get('email', ''):<32}  {user.get('createdAt', '')}"
        )
    return 0


def _create_user(service_url: str, name: str, email: str) -> int:
    try:
        response = httpx.post(
            f"{service_url}/users",
            json={"name": name, "email": email},
            timeout=10.0,
        )
    except httpx.HTTPError as exc:
        print(f"Failed to contact user service: {exc}")
        return 1

    if response.status_code != 201:
        print(f"Failed to create user: {_error_text(response)}")
        return 1

    user = response.json()
    print(f"Created user {user['id']}: {user['name']} <{user['email']}>")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for CLI usage."""

    args = _parse_args(argv)
    settings = load_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    if args.command == "serve":
        _serve(settings=settings, host=args.host, port=args.port)
        return 0
    if args.command == "list-users":
        return _list_users(_resolve_service_url(args.service_url, settings))
    if args.command == "create-user":
        return _create_user(_resolve_service_url(args.service_url, settings), args.name, args.email)
    return 1


if __name__ == "__main__":
    sys.exit(main())
