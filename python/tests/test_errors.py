"""Error codes, envelopes, and how failures reach the client."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from soloboss.errors import (
    ERROR_CODE_TO_STATUS,
    ApiError,
    ApiErrorCode,
    ForbiddenError,
    InvalidRequestError,
    NotFoundError,
    UnauthenticatedError,
    user_not_found,
)
from soloboss.responses import (
    error_response,
    success_response,
    unhandled_exception_handler,
)
from tests.helpers import auth_headers


def test_envelopes():
    assert error_response(ApiErrorCode.E_NOT_FOUND, "Resource not found") == {
        "error": {"code": "E_NOT_FOUND", "message": "Resource not found"}
    }
    assert error_response(ApiErrorCode.E_FORBIDDEN, "no", request_id="req-1")["error"][
        "request_id"
    ] == "req-1"
    assert success_response({"id": "123"}) == {"data": {"id": "123"}}
    # Deletes answer with a bare boolean
    assert success_response(False) == {"data": False}


def test_every_code_has_a_status():
    assert set(ERROR_CODE_TO_STATUS) == set(ApiErrorCode)


@pytest.mark.parametrize(
    "status,codes",
    [
        (400, [ApiErrorCode.E_INVALID_REQUEST, ApiErrorCode.E_AGENT_INACTIVE]),
        (401, [ApiErrorCode.E_UNAUTHENTICATED]),
        (403, [ApiErrorCode.E_FORBIDDEN, ApiErrorCode.E_INTERNAL_ONLY]),
        (
            404,
            [
                ApiErrorCode.E_NOT_FOUND,
                ApiErrorCode.E_USER_NOT_FOUND,
                ApiErrorCode.E_TASK_NOT_FOUND,
                ApiErrorCode.E_DOCUMENT_NOT_FOUND,
                ApiErrorCode.E_AGENT_NOT_FOUND,
            ],
        ),
        (500, [ApiErrorCode.E_INTERNAL]),
        (503, [ApiErrorCode.E_AUTH_UNAVAILABLE]),
    ],
)
def test_code_status(status, codes):
    assert {ERROR_CODE_TO_STATUS[code] for code in codes} == {status}


@pytest.mark.parametrize(
    "error,code,status",
    [
        (NotFoundError(), ApiErrorCode.E_NOT_FOUND, 404),
        (ForbiddenError(), ApiErrorCode.E_FORBIDDEN, 403),
        (InvalidRequestError(), ApiErrorCode.E_INVALID_REQUEST, 400),
        (UnauthenticatedError(), ApiErrorCode.E_UNAUTHENTICATED, 401),
        (ApiError(), ApiErrorCode.E_INTERNAL, 500),
    ],
)
def test_subclass_defaults(error, code, status):
    assert (error.code, error.status_code) == (code, status)
    assert error.message


def test_explicit_code_overrides_default():
    error = NotFoundError(ApiErrorCode.E_TASK_NOT_FOUND, "Task not found or access denied")

    assert error.code == ApiErrorCode.E_TASK_NOT_FOUND
    assert error.message == str(error) == "Task not found or access denied"
    assert error.status_code == 404


def test_user_not_found():
    error = user_not_found("abc")

    assert error.code == ApiErrorCode.E_USER_NOT_FOUND
    assert error.message == "User with id abc not found"


class TestRequestFailures:
    def test_malformed_json(self, client: TestClient, user_id):
        response = client.post(
            "/tasks",
            content="{invalid json",
            headers={**auth_headers(user_id), "content-type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "E_INVALID_REQUEST"

    def test_validation_message_names_field(self, client: TestClient, user_id):
        response = client.post("/tasks", json={"title": ""}, headers=auth_headers(user_id))

        assert response.status_code == 400
        assert response.json()["error"]["message"].startswith("Invalid request: title:")

    def test_error_echoes_request_id(self, client: TestClient, user_id):
        response = client.post("/tasks", json={}, headers=auth_headers(user_id))

        assert response.json()["error"]["request_id"] == response.headers["X-Request-ID"]

    @pytest.mark.parametrize(
        "method,path,status,code",
        [
            ("GET", "/nope", 404, "E_NOT_FOUND"),
            ("PUT", "/tasks", 405, "E_INVALID_REQUEST"),
        ],
    )
    def test_framework_errors_enveloped(self, client: TestClient, user_id, method, path, status, code):
        response = client.request(method, path, headers=auth_headers(user_id))

        assert response.status_code == status
        assert response.json()["error"]["code"] == code


def test_unhandled_exception_is_opaque():
    app = FastAPI()

    @app.get("/boom")
    def boom():
        raise RuntimeError("SECRET_INTERNAL_DETAIL")

    app.add_exception_handler(Exception, unhandled_exception_handler)
    response = TestClient(app, raise_server_exceptions=False).get("/boom")

    assert response.status_code == 500
    error = response.json()["error"]
    assert error["code"] == "E_INTERNAL"
    assert error["message"] == "Internal server error"
    assert "SECRET_INTERNAL_DETAIL" not in response.text
