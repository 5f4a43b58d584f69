from unittest.mock import patch

import httpx

from services.common.core.config import BaseAppConfig
from services.common.core.http_client import DEFAULT_JSON_HEADERS, HttpClientFactory


class TestHttpClientFactory:
    @patch("httpx.AsyncClient")
    def test_create_async_client_verify_false(self, mock_client):
        """VERIFY_SSL=False should produce client with verify=False"""
        config = BaseAppConfig(_env_file=None, VERIFY_SSL=False)
        factory = HttpClientFactory(config)
        factory.create_async_client()

        mock_client.assert_called_once()
        _, kwargs = mock_client.call_args
        assert kwargs["verify"] is False
        assert kwargs["trust_env"] is False

    @patch("httpx.AsyncClient")
    def test_create_async_client_verify_true(self, mock_client):
        """VERIFY_SSL=True should produce client with verify=True"""
        config = BaseAppConfig(_env_file=None, VERIFY_SSL=True)
        factory = HttpClientFactory(config)
        factory.create_async_client()

        _, kwargs = mock_client.call_args
        assert kwargs["verify"] is True

    @patch("httpx.AsyncClient")
    def test_explicit_verify_overrides_config(self, mock_client):
        config = BaseAppConfig(_env_file=None, VERIFY_SSL=True)
        HttpClientFactory(config).create_async_client(verify=False)

        _, kwargs = mock_client.call_args
        assert kwargs["verify"] is False

    @patch("httpx.AsyncClient")
    def test_json_headers_and_limits_by_default(self, mock_client):
        config = BaseAppConfig(_env_file=None)
        HttpClientFactory(config).create_async_client(timeout=5.0)

        _, kwargs = mock_client.call_args
        assert kwargs["headers"] == DEFAULT_JSON_HEADERS
        assert kwargs["timeout"] == 5.0
        assert isinstance(kwargs["limits"], httpx.Limits)

    @patch("httpx.AsyncClient")
    def test_caller_limits_are_kept(self, mock_client):
        limits = httpx.Limits(max_connections=3)
        config = BaseAppConfig(_env_file=None)
        HttpClientFactory(config).create_async_client(limits=limits)

        _, kwargs = mock_client.call_args
        assert kwargs["limits"] is limits
