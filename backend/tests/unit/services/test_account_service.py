"""Tests for the account state machine (create / activate / authenticate)."""

from __future__ import annotations

import uuid

import pytest
from sqlalchemy.exc import IntegrityError

from tests.factories.account import DEFAULT_PASSWORD, AccountFactory
from tokengate.models import Account
from tokengate.repositories.account import AccountRepository
from tokengate.services._shared.errors import (
    AccountNotActivated,
    BadCredentials,
    DuplicateAccount,
    InvalidActivationLink,
    UnknownAccount,
)
from tokengate.services.accounts import AccountOut, AccountService


def test_create_normalizes_email_and_hashes_secret(account_service, session):
    out = account_service.create("  New.User@Example.com ", "hunter2")

    assert isinstance(out, AccountOut)
    assert out.email == "new.user@example.com"
    assert out.is_activated is False
    uuid.UUID(out.activation_link, version=4)

    row = session.get(Account, out.id)
    assert row.password_hash != "hunter2"
    assert account_service.hasher.verify("hunter2", row.password_hash)


def test_create_twice_with_same_email_is_duplicate(account_service, session):
    account_service.create("dup@example.com", "one")

    with pytest.raises(DuplicateAccount) as excinfo:
        account_service.create("DUP@example.com", "two")

    assert excinfo.value.email == "dup@example.com"
    assert account_service.list_accounts()[0].email == "dup@example.com"
    assert len(account_service.list_accounts()) == 1


def test_create_losing_the_race_on_the_unique_index_is_duplicate(account_service, session, monkeypatch):
    first = account_service.create("race@example.com", "one")
    # A concurrent registration committed between the pre-check and the insert.
    monkeypatch.setattr(AccountRepository, "exists_by_email", lambda self, email: False)

    with pytest.raises(DuplicateAccount) as excinfo:
        account_service.create("Race@example.com", "two")

    assert excinfo.value.email == "race@example.com"
    assert isinstance(excinfo.value.__cause__, IntegrityError)
    assert [a.id for a in account_service.list_accounts()] == [first.id]
    row = session.get(Account, first.id)
    assert row.email == "race@example.com"
    assert account_service.hasher.verify("one", row.password_hash)


def test_activation_links_are_unique(account_service, session):
    a = account_service.create("a@example.com", "x")
    b = account_service.create("b@example.com", "x")
    assert a.activation_link != b.activation_link


def test_activate_flips_flag(account_service, session):
    account = AccountFactory()

    out = account_service.activate(account.activation_link)

    assert out.is_activated is True
    session.refresh(account)
    assert account.is_activated is True


def test_activate_is_idempotent(account_service, session):
    account = AccountFactory(is_activated=True)
    out = account_service.activate(account.activation_link)
    assert out.is_activated is True


def test_activate_unknown_link_changes_nothing(account_service, session):
    account = AccountFactory()

    with pytest.raises(InvalidActivationLink):
        account_service.activate(str(uuid.uuid4()))

    session.refresh(account)
    assert account.is_activated is False


def test_authenticate_returns_account(account_service, session):
    account = AccountFactory(password="correct horse")
    out = account_service.authenticate(account.email.upper(), "correct horse")
    assert out.id == account.id


def test_authenticate_unknown_email(account_service, session):
    with pytest.raises(UnknownAccount):
        account_service.authenticate("ghost@example.com", "x")


def test_authenticate_wrong_secret(account_service, session):
    account = AccountFactory()
    with pytest.raises(BadCredentials):
        account_service.authenticate(account.email, DEFAULT_PASSWORD + "!")


def test_authenticate_unverified_allowed_by_default(account_service, session):
    account = AccountFactory(is_activated=False)
    assert account_service.authenticate(account.email, DEFAULT_PASSWORD).is_activated is False


def test_authenticate_unverified_rejected_when_activation_required(hasher, session):
    service = AccountService(hasher=hasher, require_activation=True)
    pending = AccountFactory(is_activated=False)
    active = AccountFactory(is_activated=True)

    with pytest.raises(AccountNotActivated):
        service.authenticate(pending.email, DEFAULT_PASSWORD)
    assert service.authenticate(active.email, DEFAULT_PASSWORD).id == active.id


def test_get_and_list(account_service, session):
    accounts = AccountFactory.create_batch(2)

    assert account_service.get(accounts[0].id).email == accounts[0].email
    assert account_service.get(accounts[-1].id + 1000) is None
    assert [a.id for a in account_service.list_accounts()] == [a.id for a in accounts]
