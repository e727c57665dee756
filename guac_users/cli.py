from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable

import anyio
import rich_click as click
import structlog
from httpx import HTTPError, HTTPStatusError, Response

from .auth import StaticTokenProvider
from .client import UserClient
from .config import ClientConfig
from .models import PermissionType, User
from .transport import HttpxTransport


def make_transport(config: ClientConfig) -> HttpxTransport:
    """Build the transport used by every command (tests replace it with an in-memory one)."""
    return HttpxTransport(config)


def _run(config: ClientConfig, call: Callable[[UserClient], Awaitable[Response]]) -> None:
    async def run() -> Response:
        async with make_transport(config) as transport:
            client = UserClient(transport, StaticTokenProvider(config.token))
            return await call(client)

    try:
        response = anyio.run(run)
    except HTTPStatusError as e:
        # the URL is left out of the message, it holds the token
        raise click.ClickException(
            f"{e.request.method} {e.request.url.path} failed with status "
            f"{e.response.status_code} ({e.response.reason_phrase})"
        )
    except HTTPError as e:
        raise click.ClickException(str(e))

    if not response.content:
        return
    try:
        data = response.json()
    except ValueError:
        click.echo(response.text)
    else:
        click.echo(json.dumps(data, indent=2))


@click.group()  # type: ignore
@click.option(
    "--base-url",
    envvar="GUAC_URL",
    type=str,
    default=ClientConfig.model_fields["base_url"].default,
    show_default=True,
    help="The root URL of the web application.",
)
@click.option(
    "--token",
    envvar="GUAC_TOKEN",
    type=str,
    default=None,
    help="The authentication token.",
)
@click.option(
    "--debug",
    is_flag=True,
    show_default=True,
    default=False,
    help="Enable debug mode.",
)
@click.pass_context
def main(
    ctx: click.Context,
    base_url: str,
    token: str | None = None,
    debug: bool = False,
) -> None:
    if debug:
        structlog.stdlib.recreate_defaults(log_level=logging.DEBUG)
    ctx.obj = ClientConfig(base_url=base_url, token=token)


@main.command("list")
@click.option(
    "--permission",
    type=click.Choice([p.value for p in PermissionType]),
    default=None,
    help="Only list the users over which the current user has this permission.",
)
@click.pass_obj
def list_(config: ClientConfig, permission: str | None = None) -> None:
    """List users."""
    _run(config, lambda client: client.list_users(permission))


@main.command()
@click.argument("username")
@click.pass_obj
def get(config: ClientConfig, username: str) -> None:
    """Show a user."""
    _run(config, lambda client: client.get_user(username))


@main.command()
@click.argument("username")
@click.option("--password", type=str, default=None, help="The password of the new user.")
@click.pass_obj
def create(config: ClientConfig, username: str, password: str | None = None) -> None:
    """Create a user."""
    user = User(username=username, password=password)
    _run(config, lambda client: client.create_user(user))


@main.command()
@click.argument("username")
@click.option("--password", type=str, default=None, help="The new password.")
@click.pass_obj
def update(config: ClientConfig, username: str, password: str | None = None) -> None:
    """Update a user."""
    user = User(username=username, password=password)
    _run(config, lambda client: client.update_user(user))


@main.command()
@click.argument("username")
@click.pass_obj
def delete(config: ClientConfig, username: str) -> None:
    """Delete a user."""
    _run(config, lambda client: client.delete_user(User(username=username)))


@main.command()
@click.argument("username")
@click.pass_obj
def permissions(config: ClientConfig, username: str) -> None:
    """Show the permissions of a user."""
    _run(config, lambda client: client.get_permissions(username))


if __name__ == "__main__":
    main()
