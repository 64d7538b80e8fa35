"""Pytest configuration and shared fixtures for SmartSpend tests.

Provides an isolated SQLite database per test, repositories and a gateway
wired to it, and factories for building records without touching the
application database.
"""

from __future__ import annotations

from datetime import date

import pytest
from sqlmodel import SQLModel, create_engine

from smartspend import models  # noqa: F401  # registers tables with SQLModel metadata
from smartspend.infra.database import create_session_factory
from smartspend.infra.repositories import (
    SQLModelBudgetRepository,
    SQLModelSavingsRepository,
    SQLModelTransactionRepository,
)
from smartspend.models import SavingsGoal, Transaction
from smartspend.services.store import StoreGateway

OWNER = "owner-1"
OTHER_OWNER = "owner-2"
# A Wednesday; its week runs Monday 2024-01-15 .. Sunday 2024-01-21.
TODAY = date(2024, 1, 17)


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine(tmp_path):
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine with all tables created
    """
    engine = create_engine(
        f"sqlite:///{tmp_path / 'smartspend-test.db'}",
        echo=False,
        connect_args={"check_same_thread": False},
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory producing transactional scopes, as repositories expect."""

    return create_session_factory(db_engine)


@pytest.fixture
def transaction_repo(session_factory):
    return SQLModelTransactionRepository(session_factory)


@pytest.fixture
def budget_repo(session_factory):
    return SQLModelBudgetRepository(session_factory)


@pytest.fixture
def savings_repo(session_factory):
    return SQLModelSavingsRepository(session_factory)


@pytest.fixture
def gateway(transaction_repo, budget_repo, savings_repo):
    return StoreGateway(
        transactions=transaction_repo,
        budgets=budget_repo,
        savings=savings_repo,
        timeout=2.0,
    )


# =============================================================================
# Test Data Factories
# =============================================================================


def make_transaction(
    amount: float,
    kind: str = "expense",
    category: str | None = None,
    on: date = TODAY,
    description: str = "",
    owner: str = OWNER,
) -> Transaction:
    """Build an unsaved transaction with sensible defaults."""

    if category is None:
        category = "Salary" if kind == "income" else "Food"
    return Transaction(
        user_id=owner,
        amount=amount,
        type=kind,
        category=category,
        description=description,
        date=on,
    )


@pytest.fixture
def transaction_factory(transaction_repo):
    """Factory persisting transactions through the repository."""

    def _create(amount: float, kind: str = "expense", owner: str = OWNER, **kwargs) -> Transaction:
        record = make_transaction(amount, kind, owner=owner, **kwargs)
        return transaction_repo.create(record, user_id=owner)

    return _create


@pytest.fixture
def savings_factory(savings_repo):
    def _create(
        title: str = "Emergency fund", amount: float = 0.0, target: float = 1000.0, owner: str = OWNER
    ) -> SavingsGoal:
        goal = SavingsGoal(user_id=owner, title=title, amount=amount, target=target)
        return savings_repo.create(goal, user_id=owner)

    return _create
