"""Tests for the HTTP client and the error mapping."""

import json

import pytest
import requests
from unittest.mock import MagicMock

from errors import (
    ApiError,
    ConnectionFailed,
    Forbidden,
    NotFound,
    ServerError,
    Unauthorized,
)
from gateway import ApiClient


def response(status: int = 200, body=None) -> MagicMock:
    mock = MagicMock()
    mock.status_code = status
    mock.content = b"" if body is None else json.dumps(body).encode()
    if body is None:
        mock.json.side_effect = ValueError("no body")
    else:
        mock.json.return_value = body
    return mock


def client_with(resp, token="tok", on_unauthorized=None) -> ApiClient:
    session = MagicMock()
    if isinstance(resp, Exception):
        session.request.side_effect = resp
    else:
        session.request.return_value = resp
    return ApiClient(
        base_url="http://api.test/api/",
        token_provider=lambda: token,
        timeout=5,
        session=session,
        on_unauthorized=on_unauthorized,
    )


class TestApiClientRequests:
    """Headers, URLs and body decoding."""

    def test_bearer_token_attached(self):
        client = client_with(response(200, [{"id": 1}]))
        assert client.get("/trabajadores") == [{"id": 1}]

        args, kwargs = client.session.request.call_args
        assert args == ("GET", "http://api.test/api/trabajadores")
        assert kwargs["headers"]["Authorization"] == "Bearer tok"
        assert kwargs["headers"]["Content-Type"] == "application/json"
        assert kwargs["timeout"] == 5

    def test_login_never_sends_token(self):
        client = client_with(response(200, {"token": "new"}))
        client.post("/auth/login", json={"username": "a", "password": "b"})
        _, kwargs = client.session.request.call_args
        assert "Authorization" not in kwargs["headers"]
        assert kwargs["json"] == {"username": "a", "password": "b"}

    def test_no_token_no_header(self):
        client = client_with(response(200, []), token=None)
        client.get("/proyectos")
        _, kwargs = client.session.request.call_args
        assert "Authorization" not in kwargs["headers"]

    def test_empty_body_returns_none(self):
        client = client_with(response(204))
        assert client.patch("/trabajadores/1/desactivar", json={}) is None

    def test_invalid_json_raises_api_error(self):
        resp = response(200)
        resp.content = b"<html>"
        client = client_with(resp)
        with pytest.raises(ApiError, match="Respuesta inválida"):
            client.get("/trabajadores")


class TestApiClientErrors:
    """Status codes map onto the ApiError family."""

    def test_connection_error(self):
        client = client_with(requests.ConnectionError("refused"))
        with pytest.raises(ConnectionFailed, match="ERROR DE CONEXIÓN") as exc:
            client.get("/trabajadores")
        assert exc.value.status == 0

    def test_timeout_is_connection_failure(self):
        client = client_with(requests.Timeout("slow"))
        with pytest.raises(ConnectionFailed):
            client.get("/trabajadores")

    def test_401_calls_on_unauthorized(self):
        logout = MagicMock()
        client = client_with(response(401, {"message": "expired"}), on_unauthorized=logout)
        with pytest.raises(Unauthorized, match="Tu sesión expiró"):
            client.get("/trabajadores")
        logout.assert_called_once_with()

    def test_403(self):
        client = client_with(response(403))
        with pytest.raises(Forbidden, match="ERROR 403"):
            client.get("/trabajadores")

    def test_404_mentions_resource_and_server_message(self):
        client = client_with(response(404, {"message": "Trabajador no existe"}))
        with pytest.raises(NotFound) as exc:
            client.get("/trabajadores/99")
        assert "/trabajadores/99" in exc.value.message
        assert "Trabajador no existe" in exc.value.message
        assert exc.value.server_message == "Trabajador no existe"

    def test_500_appends_server_message(self):
        client = client_with(response(500, {"error": "NullPointerException"}))
        with pytest.raises(ServerError, match="NullPointerException"):
            client.get("/proyectos")

    def test_other_status_uses_server_message(self):
        client = client_with(response(409, {"message": "Conflicto"}))
        with pytest.raises(ApiError) as exc:
            client.put("/proyectos/1", json={})
        assert exc.value.message == "ERROR 409: Conflicto"
        assert exc.value.status == 409
        assert type(exc.value) is ApiError

    def test_401_without_callback_still_raises(self):
        client = client_with(response(401))
        with pytest.raises(Unauthorized):
            client.get("/trabajadores")


class TestErrorMapping:
    """ApiError.from_status without a transport."""

    @pytest.mark.parametrize("status,cls", [
        (0, ConnectionFailed),
        (401, Unauthorized),
        (403, Forbidden),
        (404, NotFound),
        (500, ServerError),
    ])
    def test_known_statuses(self, status, cls):
        error = ApiError.from_status(status)
        assert isinstance(error, cls)
        assert error.status == status

    def test_unknown_status_default_detail(self):
        error = ApiError.from_status(418)
        assert error.message == "ERROR 418: Error al procesar la solicitud"
