import pytest
import respx
from fastapi.testclient import TestClient

from services.content_proxy.config import ProxyConfig

UPSTREAM_BASE_URL = "https://upstream.test/api"


@pytest.fixture
def proxy_config():
    return ProxyConfig(_env_file=None, UPSTREAM_BASE_URL=UPSTREAM_BASE_URL)


@pytest.fixture
def upstream():
    """Mocked content backend; requests that match no route fail the test."""
    with respx.mock(assert_all_called=False) as mock:
        yield mock


@pytest.fixture
def client(proxy_config, upstream):
    from services.content_proxy.main import create_app

    app = create_app(proxy_config)
    with TestClient(app) as test_client:
        yield test_client
