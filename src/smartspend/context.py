"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from sqlmodel import Session

from .config import BaseConfig
from .infra.database import create_db_engine, create_session_factory, init_database
from .infra.repositories import (
    SQLModelBudgetRepository,
    SQLModelSavingsRepository,
    SQLModelTransactionRepository,
)
from .services.store import StoreGateway


@dataclass
class AppContext:
    """Configuration, repositories and the gateway built on top of them."""

    config: BaseConfig
    engine: object
    session_factory: Callable[[], Session]

    transaction_repo: SQLModelTransactionRepository
    budget_repo: SQLModelBudgetRepository
    savings_repo: SQLModelSavingsRepository

    gateway: StoreGateway

    def dispose(self) -> None:
        self.engine.dispose()


def create_app_context(config: Optional[BaseConfig] = None) -> AppContext:
    """Create the engine, make sure the schema exists and wire repositories."""

    if config is None:
        config = BaseConfig()

    engine = create_db_engine(config)
    init_database(engine)
    session_factory = create_session_factory(engine)

    transaction_repo = SQLModelTransactionRepository(session_factory)
    budget_repo = SQLModelBudgetRepository(session_factory)
    savings_repo = SQLModelSavingsRepository(session_factory)

    gateway = StoreGateway(
        transactions=transaction_repo,
        budgets=budget_repo,
        savings=savings_repo,
        timeout=config.STORE_TIMEOUT_SECONDS,
    )

    return AppContext(
        config=config,
        engine=engine,
        session_factory=session_factory,
        transaction_repo=transaction_repo,
        budget_repo=budget_repo,
        savings_repo=savings_repo,
        gateway=gateway,
    )
