"""Unit tests for group HTTP routes."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI, status
from fastapi.testclient import TestClient

from iam.application.services import GroupService
from iam.application.value_objects import CurrentUser
from iam.domain.aggregates import Group
from iam.domain.value_objects import GroupId
from iam.ports.exceptions import GroupNotFoundError
from shared_kernel.authorization import (
    Capability,
    MissingCapabilityError,
    NotAMemberError,
)


@pytest.fixture
def mock_group_service() -> AsyncMock:
    return AsyncMock(spec=GroupService)


@pytest.fixture
def test_client(mock_group_service: AsyncMock, current_user: CurrentUser) -> TestClient:
    from iam.dependencies.group import get_group_service
    from iam.dependencies.user import get_current_user
    from iam.presentation import router

    app = FastAPI()
    app.dependency_overrides[get_group_service] = lambda: mock_group_service
    app.dependency_overrides[get_current_user] = lambda: current_user
    app.include_router(router)

    return TestClient(app)


@pytest.fixture
def group(group_id: GroupId) -> Group:
    return Group(id=group_id, name="Kitchen", slug="kitchen")


class TestCreateGroup:
    def test_returns_201(
        self, test_client, mock_group_service, current_user, group
    ) -> None:
        mock_group_service.create_group.return_value = group

        response = test_client.post("/iam/groups", json={"name": "Kitchen"})

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["slug"] == "kitchen"
        assert response.json()["allow_power_user_edit"] is True
        mock_group_service.create_group.assert_called_once_with(
            creator_id=current_user.user_id, name="Kitchen"
        )

    def test_invalid_name_returns_400(self, test_client, mock_group_service) -> None:
        mock_group_service.create_group.side_effect = ValueError("Group name cannot be empty")

        response = test_client.post("/iam/groups", json={"name": " "})

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestGetGroup:
    def test_returns_group(self, test_client, mock_group_service, group) -> None:
        mock_group_service.get_group.return_value = group

        response = test_client.get(f"/iam/groups/{group.id.value}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["id"] == group.id.value

    def test_non_member_gets_404(self, test_client, mock_group_service, group) -> None:
        mock_group_service.get_group.side_effect = NotAMemberError(
            user_id="u", group_id=group.id.value
        )

        response = test_client.get(f"/iam/groups/{group.id.value}")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "Group not found"

    def test_malformed_id_gets_404(self, test_client, mock_group_service) -> None:
        response = test_client.get("/iam/groups/not-a-ulid")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        mock_group_service.get_group.assert_not_called()

    def test_missing_group_gets_404(self, test_client, mock_group_service, group) -> None:
        mock_group_service.get_group.side_effect = GroupNotFoundError("missing")

        response = test_client.get(f"/iam/groups/{group.id.value}")

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestUpdateGroupSettings:
    def test_toggles_power_user_edit(
        self, test_client, mock_group_service, current_user, group
    ) -> None:
        group.set_power_user_edit(False)
        mock_group_service.update_group_settings.return_value = group

        response = test_client.patch(
            f"/iam/groups/{group.id.value}", json={"allow_power_user_edit": False}
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["allow_power_user_edit"] is False
        mock_group_service.update_group_settings.assert_called_once_with(
            group_id=group.id,
            user_id=current_user.user_id,
            name=None,
            allow_power_user_edit=False,
        )

    def test_non_admin_gets_403(self, test_client, mock_group_service, group) -> None:
        mock_group_service.update_group_settings.side_effect = MissingCapabilityError(
            Capability.GROUP_UPDATE
        )

        response = test_client.patch(
            f"/iam/groups/{group.id.value}", json={"name": "New"}
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_empty_body_gets_400(self, test_client, mock_group_service, group) -> None:
        mock_group_service.update_group_settings.side_effect = ValueError(
            "At least one setting must be provided"
        )

        response = test_client.patch(f"/iam/groups/{group.id.value}", json={})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
