"""Repository tests for accounts and refresh sessions."""

from __future__ import annotations

from tests.factories.account import AccountFactory, RefreshSessionFactory
from tokengate.repositories import AccountRepository, RefreshSessionRepository
from tokengate.services._shared.ports import token_digest


def test_get_by_email_is_case_insensitive(session):
    account = AccountFactory(email="someone@example.com")
    repo = AccountRepository(session=session)

    assert repo.get_by_email("SomeOne@Example.com ") == account
    assert repo.exists_by_email("someone@example.com") is True
    assert repo.get_by_email("nobody@example.com") is None
    assert repo.exists_by_email("nobody@example.com") is False


def test_get_by_activation_link(session):
    account = AccountFactory()
    repo = AccountRepository(session=session)

    assert repo.get_by_activation_link(account.activation_link) == account
    assert repo.get_by_activation_link("not-a-link") is None


def test_list_all_is_ordered_by_id(session):
    created = AccountFactory.create_batch(3)
    repo = AccountRepository(session=session)

    assert [a.id for a in repo.list_all()] == sorted(a.id for a in created)
    assert repo.count() == 3


def test_refresh_session_upsert_overwrites_in_place(session):
    account = AccountFactory()
    repo = RefreshSessionRepository(session=session)

    first = repo.upsert(account_id=account.id, token_hash=token_digest("one"))
    second = repo.upsert(account_id=account.id, token_hash=token_digest("two"))

    assert first.id == second.id
    assert repo.count() == 1
    assert repo.get_by_token_hash(token_digest("one")) is None
    assert repo.get_by_token_hash(token_digest("two")).account_id == account.id


def test_refresh_session_lookup_by_account(session):
    row = RefreshSessionFactory()
    repo = RefreshSessionRepository(session=session)

    assert repo.get_by_account_id(row.account_id) == row
    assert repo.get_by_account_id(row.account_id + 1000) is None
