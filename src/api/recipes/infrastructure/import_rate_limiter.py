"""Keyed counter store for import throttling, backed by PostgreSQL.

Attempts are rows in import_attempts. A transaction-scoped advisory lock
on the key serializes concurrent attempts for the same user across all
API replicas, so counting and recording happen atomically.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from ulid import ULID

from recipes.infrastructure.models import ImportAttemptModel
from recipes.ports.extraction import IImportRateLimiter


class PostgresImportRateLimiter(IImportRateLimiter):
    """Rolling-window limiter. Must be called inside an open transaction."""

    def __init__(self, session: AsyncSession, limit: int, window_seconds: int):
        self._session = session
        self._limit = limit
        self._window_seconds = window_seconds

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def window_seconds(self) -> int:
        return self._window_seconds

    async def try_acquire(self, key: str) -> bool:
        await self._session.execute(
            select(func.pg_advisory_xact_lock(func.hashtext(key)))
        )

        now = datetime.now(UTC)
        cutoff = now - timedelta(seconds=self._window_seconds)
        await self._session.execute(
            delete(ImportAttemptModel).where(
                ImportAttemptModel.key == key,
                ImportAttemptModel.attempted_at < cutoff,
            )
        )

        used = (
            await self._session.execute(
                select(func.count()).where(ImportAttemptModel.key == key)
            )
        ).scalar_one()
        if used >= self._limit:
            return False

        self._session.add(
            ImportAttemptModel(id=str(ULID()), key=key, attempted_at=now)
        )
        await self._session.flush()
        return True
