"""Unit test fixtures with mocked dependencies."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from iam.application.value_objects import CurrentUser
from iam.domain.value_objects import GroupId, Membership, UserId
from shared_kernel.authorization.types import Role


@pytest.fixture
def mock_session():
    """Create mock async session with transaction support."""
    session = AsyncMock()
    mock_transaction = MagicMock()
    mock_transaction.__aenter__ = AsyncMock(return_value=None)
    mock_transaction.__aexit__ = AsyncMock(return_value=None)
    session.begin = MagicMock(return_value=mock_transaction)
    return session


@pytest.fixture
def group_id() -> GroupId:
    return GroupId.generate()


@pytest.fixture
def user_id() -> UserId:
    return UserId(value="user-alice")


@pytest.fixture
def other_user_id() -> UserId:
    return UserId(value="user-bob")


@pytest.fixture
def make_membership(group_id: GroupId) -> Callable[..., Membership]:
    """Build a Membership in the default test group."""

    def _make(
        user_id: UserId, role: Role, group: GroupId | None = None
    ) -> Membership:
        return Membership(
            user_id=user_id,
            group_id=group or group_id,
            role=role,
            joined_at=datetime(2026, 1, 1, tzinfo=UTC),
        )

    return _make


@pytest.fixture
def current_user(user_id: UserId, group_id: GroupId) -> CurrentUser:
    return CurrentUser(user_id=user_id, username="alice", group_id=group_id)
