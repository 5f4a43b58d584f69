import os

from services.common.core.logging_config import setup_logging as common_setup_logging


def setup_logging(config_path: str = ""):
    """
    Load the YAML config and initialize logging.
    """
    config_path = config_path or os.getenv("LOG_CONFIG_PATH", "config/proxy_log.yaml")
    common_setup_logging(config_path)
