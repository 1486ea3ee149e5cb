"""Shared pytest fixtures for Cloud Functions tests."""
import httpx
import pytest
from unittest.mock import MagicMock, patch

TOKEN_URL = "https://session.voxeet.com/v1/oauth2/token"


@pytest.fixture
def make_upstream_response():
    """Factory for real httpx.Response objects as the upstream sends them."""
    def make(status_code=200, json_body=None, content=b""):
        request = httpx.Request("POST", TOKEN_URL)
        if json_body is not None:
            return httpx.Response(
                status_code, json=json_body, request=request)
        return httpx.Response(status_code, content=content, request=request)
    return make


@pytest.fixture
def mock_secret_manager():
    """Mock Secret Manager client holding the app key and secret."""
    with patch(
        "google.cloud.secretmanager.SecretManagerServiceClient"
    ) as mock_cls:
        mock_client = MagicMock()
        mock_cls.return_value = mock_client

        def make_secret_response(value):
            resp = MagicMock()
            resp.payload.data.decode.return_value = value
            return resp

        mock_client.access_secret_version.side_effect = (
            lambda request: {
                "projects/tsvet01/secrets/comms-app-key/versions/latest":
                    make_secret_response("sm-key\n"),
                "projects/tsvet01/secrets/comms-app-secret/versions/latest":
                    make_secret_response("sm-secret\n"),
            }.get(request["name"], make_secret_response(""))
        )

        yield mock_client


@pytest.fixture
def mock_httpx(make_upstream_response):
    """Mock httpx Client answering the token call with a valid token."""
    with patch("httpx.Client") as mock_cls:
        mock_client = MagicMock()
        mock_cls.return_value.__enter__ = MagicMock(
            return_value=mock_client)
        mock_cls.return_value.__exit__ = MagicMock(return_value=False)
        mock_client.post.return_value = make_upstream_response(
            json_body={"access_token": "abc", "expires_in": 3600})
        yield mock_client


@pytest.fixture
def clean_env(monkeypatch):
    """Strip configuration variables so defaults apply."""
    for name in (
        "APP_KEY", "APP_SECRET", "TOKEN_URL", "UPSTREAM_TIMEOUT_SECONDS",
        "TOKEN_EXPIRES_IN", "GOOGLE_CLOUD_PROJECT", "APP_KEY_SECRET",
        "APP_SECRET_SECRET", "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
