"""
Tests for query helpers, retry policy and row mapping.
"""

from datetime import UTC, datetime

import psycopg
import pytest

from networknote.db import helpers
from networknote.db.helpers import with_db_retry
from networknote.errors import PersistenceFailure
from networknote.models.domain.directory_domain import AdminUser, version_from_timestamp
from networknote.repositories.hr_repository import HRRepository
from networknote.repositories.user_accounts_repository import UserAccountsRepository


def failure_from(cause: Exception) -> PersistenceFailure:
    failure = PersistenceFailure(str(cause), operation="test")
    failure.__cause__ = cause
    return failure


@pytest.mark.asyncio
async def test_retry_on_operational_errors_then_succeeds():
    attempts = []

    @with_db_retry(max_retries=3, base_delay=0)
    async def flaky():
        attempts.append(1)
        if len(attempts) < 3:
            raise failure_from(psycopg.OperationalError("server closed the connection"))
        return "ok"

    assert await flaky() == "ok"
    assert len(attempts) == 3


@pytest.mark.asyncio
async def test_no_retry_for_other_failures():
    attempts = []

    @with_db_retry(max_retries=3, base_delay=0)
    async def broken():
        attempts.append(1)
        raise failure_from(RuntimeError("Database pool not initialized"))

    with pytest.raises(PersistenceFailure):
        await broken()
    assert len(attempts) == 1


@pytest.mark.asyncio
async def test_retry_gives_up_after_max():
    attempts = []

    @with_db_retry(max_retries=2, base_delay=0)
    async def down():
        attempts.append(1)
        raise failure_from(psycopg.OperationalError("connection refused"))

    with pytest.raises(PersistenceFailure):
        await down()
    assert len(attempts) == 3


@pytest.mark.asyncio
async def test_uninitialized_pool_is_persistence_failure():
    with pytest.raises(PersistenceFailure) as exc_info:
        await HRRepository.count_companies()
    assert isinstance(exc_info.value.__cause__, RuntimeError)


@pytest.mark.asyncio
async def test_companies_deduplicated_in_order(monkeypatch):
    async def fake_fetch_all(query, params=()):
        assert params == ("G%",)
        return [{"company": "Globex"}, {"company": "Google"}, {"company": "Google"}, {"company": None}]

    monkeypatch.setattr("networknote.repositories.hr_repository.fetch_all", fake_fetch_all)

    assert await HRRepository.companies_starting_with("G") == ["Globex", "Google"]


@pytest.mark.asyncio
async def test_fetch_val_returns_first_column(monkeypatch):
    async def fake_fetch_one(query, params=(), *, connection=None):
        return {"count": 42}

    monkeypatch.setattr(helpers, "fetch_one", fake_fetch_one)
    assert await helpers.fetch_val("SELECT COUNT(*) FROM hr_details") == 42


@pytest.mark.asyncio
async def test_assign_manager_skips_empty_list(monkeypatch):
    async def unexpected(*args, **kwargs):
        raise AssertionError("no query expected")

    monkeypatch.setattr("networknote.repositories.user_accounts_repository.execute_query", unexpected)
    assert await UserAccountsRepository.assign_manager([], "Robert Wilson") == 0


def test_admin_user_from_row():
    updated = datetime(2024, 3, 1, 12, 0, tzinfo=UTC)
    user = AdminUser.from_row(
        {
            "id": "abc",
            "full_name": None,
            "email": "jo@example.com",
            "role": None,
            "manager": None,
            "status": "PAID",
            "created_at": datetime(2024, 1, 15, 9, 30, tzinfo=UTC),
            "last_sign_in_at": datetime(2024, 2, 2, 15, 5, tzinfo=UTC),
            "updated_at": updated,
        }
    )

    assert user.name == "N/A"
    assert user.role == "user"
    assert user.manager == "Unassigned"
    assert user.status == "paid"
    assert user.created_at == "2024-01-15"
    assert user.last_login == "Feb 02, 2024, 03:05 PM"
    assert user.version == version_from_timestamp(updated) > 0


def test_admin_user_from_sparse_row():
    user = AdminUser.from_row({"status": "trial"}, index=7)
    assert user.id == "7"
    assert user.status == "unpaid"
    assert user.last_login == "Never"
    assert user.version == 0
