"""Flask CLI commands for inspecting and activating accounts."""

from __future__ import annotations

import logging

import click
from flask.cli import with_appcontext

from tokengate.container import get_auth_service
from tokengate.services._shared.errors import AuthError

LOGGER = logging.getLogger(__name__)


@click.group("accounts")
def accounts_cli() -> None:
    """Account administration commands."""


@accounts_cli.command("list")
@with_appcontext
def list_command() -> None:
    """Print every account with its activation state."""
    accounts = get_auth_service().list_accounts()
    if not accounts:
        click.echo("(no accounts)")
        return
    width = max(len(a.email) for a in accounts)
    for account in accounts:
        state = "activated" if account.is_activated else "pending"
        click.echo(f"{account.id:>5}  {account.email.ljust(width)}  {state}")


@accounts_cli.command("activate")
@click.argument("link")
@with_appcontext
def activate_command(link: str) -> None:
    """Activate the account owning LINK (same effect as following the mail)."""
    try:
        get_auth_service().activate(link)
    except AuthError as exc:
        raise click.ClickException(str(exc)) from exc
    LOGGER.info("cli.accounts.activate")
    click.echo("Account activated.")
