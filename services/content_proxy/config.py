"""
Content proxy configuration definition.

Loads configuration from environment variables and provides a Pydantic model.
Uses pydantic-settings for type safety and defaults.
"""

import sys
from pathlib import Path

from pydantic import Field

from services.common.core.config import BaseAppConfig

DEFAULT_RESOURCES_PATH = str(Path(__file__).resolve().parent / "resources.yml")


class ProxyConfig(BaseAppConfig):
    """
    Configuration management for the content proxy service.
    """

    # Server settings
    UVICORN_WORKERS: int = Field(default=2, ge=1, description="Number of worker processes")
    UVICORN_BIND_ADDR: str = Field(default="0.0.0.0:8000", description="Listen address")
    LOG_CONFIG_PATH: str = Field(
        default="config/proxy_log.yaml", description="Logging dictConfig YAML path"
    )

    # Upstream content backend
    UPSTREAM_BASE_URL: str = Field(
        default="https://website.anwarululoom.com/api", description="Content backend base URL"
    )
    UPSTREAM_TIMEOUT: float = Field(
        default=30.0, gt=0, description="Upstream request timeout (seconds)"
    )

    # Resource table
    RESOURCES_CONFIG_PATH: str = Field(
        default=DEFAULT_RESOURCES_PATH, description="Proxied resource definition file path"
    )

    # Response caching
    UPSTREAM_CACHE_MAX_SIZE: int = Field(
        default=256, ge=1, description="Max cached upstream responses"
    )
    STALE_WHILE_REVALIDATE_SECONDS: int = Field(
        default=300, ge=0, description="stale-while-revalidate window advertised to CDNs"
    )

    # FastAPI settings
    root_path: str = Field(default="", description="API root path (for proxy)")


# Load config as a singleton.
# pydantic-settings reads environment variables during instantiation.
try:
    config = ProxyConfig()
except Exception as e:
    sys.stderr.write(f"Failed to load configuration: {e}\n")
    raise
