"""Tests for the current user profile endpoints (GET/PATCH /me)."""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from soloboss.db.models import User
from soloboss.errors import ApiErrorCode, NotFoundError
from soloboss.schemas.user import UpdateUserProfileRequest
from soloboss.services import profile as profile_service
from tests.factories import create_test_user
from tests.helpers import auth_headers


class TestGetMe:
    def test_returns_profile(self, client: TestClient, user_id):
        response = client.get("/me", headers=auth_headers(user_id))

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["id"] == str(user_id)
        assert data["first_name"] == "Ada"
        assert data["last_name"] == "Owner"
        assert data["email"] == f"{user_id.hex}@example.com"
        assert data["profile_picture_url"] is None

    def test_unknown_user(self, client: TestClient):
        ghost_id = uuid4()

        response = client.get("/me", headers=auth_headers(ghost_id))

        assert response.status_code == 404
        assert response.json()["error"]["code"] == ApiErrorCode.E_USER_NOT_FOUND.value

    def test_service_returns_none_for_unknown_user(self, db_session: Session):
        assert profile_service.get_user_profile(db_session, uuid4()) is None


class TestUpdateMe:
    def test_updates_only_given_fields(self, client: TestClient, user_id):
        response = client.patch("/me", json={"first_name": "Grace"}, headers=auth_headers(user_id))

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["first_name"] == "Grace"
        assert data["last_name"] == "Owner"

    def test_set_and_clear_profile_picture(self, client: TestClient, user_id):
        url = "https://cdn.example.com/avatars/ada.png"

        set_response = client.patch(
            "/me", json={"profile_picture_url": url}, headers=auth_headers(user_id)
        )
        clear_response = client.patch(
            "/me", json={"profile_picture_url": None}, headers=auth_headers(user_id)
        )

        assert set_response.json()["data"]["profile_picture_url"] == url
        assert clear_response.json()["data"]["profile_picture_url"] is None

    def test_invalid_picture_url_rejected(self, client: TestClient, user_id):
        response = client.patch(
            "/me", json={"profile_picture_url": "javascript:alert(1)"}, headers=auth_headers(user_id)
        )

        assert response.status_code == 400

    @pytest.mark.parametrize("field", ["first_name", "last_name"])
    def test_null_name_rejected(self, client: TestClient, user_id, field):
        response = client.patch("/me", json={field: None}, headers=auth_headers(user_id))

        assert response.status_code == 400
        assert response.json()["error"]["code"] == ApiErrorCode.E_INVALID_REQUEST.value

    def test_empty_name_rejected(self, client: TestClient, user_id):
        response = client.patch("/me", json={"last_name": ""}, headers=auth_headers(user_id))

        assert response.status_code == 400

    def test_email_cannot_change(self, client: TestClient, db_session: Session, user_id):
        response = client.patch(
            "/me", json={"email": "new@example.com"}, headers=auth_headers(user_id)
        )

        assert response.status_code == 200
        db_session.expire_all()
        assert db_session.get(User, user_id).email == f"{user_id.hex}@example.com"

    def test_empty_update_touches_updated_at(self, client: TestClient, db_session: Session):
        caller = create_test_user(db_session)
        before = db_session.get(User, caller).updated_at

        response = client.patch("/me", json={}, headers=auth_headers(caller))

        assert response.status_code == 200
        db_session.expire_all()
        assert db_session.get(User, caller).updated_at >= before

    def test_does_not_touch_other_users(
        self, client: TestClient, db_session: Session, user_id, other_user_id
    ):
        client.patch("/me", json={"first_name": "Changed"}, headers=auth_headers(user_id))

        db_session.expire_all()
        assert db_session.get(User, other_user_id).first_name == "Bob"

    def test_unknown_user_raises(self, db_session: Session):
        ghost_id = uuid4()

        with pytest.raises(NotFoundError) as exc_info:
            profile_service.update_user_profile(
                db_session, ghost_id, UpdateUserProfileRequest(first_name="Nobody")
            )

        assert exc_info.value.code == ApiErrorCode.E_USER_NOT_FOUND
        assert exc_info.value.message == f"User with id {ghost_id} not found"
