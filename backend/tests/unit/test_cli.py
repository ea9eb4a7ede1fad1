"""Tests for the ``flask accounts`` command group."""

from __future__ import annotations

from tests.factories.account import AccountFactory
from tokengate.models import Account


def test_list_prints_accounts(app, session):
    AccountFactory(email="cli-a@example.com", is_activated=True)
    AccountFactory(email="cli-b@example.com")

    result = app.test_cli_runner().invoke(args=["accounts", "list"])

    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert "cli-a@example.com" in lines[0] and lines[0].endswith("activated")
    assert "cli-b@example.com" in lines[1] and lines[1].endswith("pending")


def test_list_without_accounts(app, session):
    result = app.test_cli_runner().invoke(args=["accounts", "list"])
    assert result.output.strip() == "(no accounts)"


def test_activate_command(app, session):
    account = AccountFactory()
    account_id, link = account.id, account.activation_link

    result = app.test_cli_runner().invoke(args=["accounts", "activate", link])

    assert result.exit_code == 0
    assert "Account activated." in result.output
    assert session.get(Account, account_id).is_activated is True


def test_activate_command_unknown_link(app, session):
    result = app.test_cli_runner().invoke(args=["accounts", "activate", "missing"])
    assert result.exit_code != 0
    assert "Invalid activation link" in result.output
