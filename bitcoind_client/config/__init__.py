"""Configuration module for bitcoind_client."""

from bitcoind_client.config.loader import get_config_path, load_config, read_cookie_file, save_config
from bitcoind_client.config.schema import ClientConfig, RetryConfig

__all__ = ["ClientConfig", "RetryConfig", "load_config", "save_config", "get_config_path", "read_cookie_file"]
