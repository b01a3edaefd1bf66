"""Integration test fixtures for database tests.

These fixtures require a running PostgreSQL instance. Tests are skipped
when none is reachable.
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator

import pytest
from pydantic import SecretStr
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

import iam.infrastructure.models  # noqa: F401
import recipes.infrastructure.models  # noqa: F401
from infrastructure.database.engines import build_async_url
from infrastructure.database.models import Base
from infrastructure.settings import DatabaseSettings


@pytest.fixture(scope="session")
def integration_db_settings() -> DatabaseSettings:
    """Database settings for integration tests.

    Override with environment variables:
        RECIPEBOOK_DB_HOST, RECIPEBOOK_DB_PORT, etc.
    """
    return DatabaseSettings(
        host=os.getenv("RECIPEBOOK_DB_HOST", "localhost"),
        port=int(os.getenv("RECIPEBOOK_DB_PORT", "5432")),
        database=os.getenv("RECIPEBOOK_DB_DATABASE", "recipebook_test"),
        username=os.getenv("RECIPEBOOK_DB_USERNAME", "recipebook"),
        password=SecretStr(
            os.getenv("RECIPEBOOK_DB_PASSWORD", "recipebook_dev_password")
        ),
    )


@pytest.fixture
async def engine(
    integration_db_settings: DatabaseSettings,
) -> AsyncGenerator[AsyncEngine, None]:
    """Provide an engine on a freshly created schema.

    NullPool keeps connections from outliving the test's event loop.
    """
    engine = create_async_engine(
        build_async_url(integration_db_settings), poolclass=NullPool
    )
    try:
        async with engine.begin() as connection:
            await connection.run_sync(Base.metadata.drop_all)
            await connection.run_sync(Base.metadata.create_all)
    except OSError as e:
        await engine.dispose()
        pytest.skip(f"PostgreSQL not reachable: {e}")

    yield engine

    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
