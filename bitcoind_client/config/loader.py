"""Configuration loading utilities."""

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from bitcoind_client.config.schema import ClientConfig

# Keys written by older releases -> current camelCase keys
LEGACY_KEYS: dict[str, str] = {
    "rpcUrl": "url",
    "rpcUser": "username",
    "rpcPassword": "password",
    "rpcCookieFile": "cookieFile",
}


def get_config_path() -> Path:
    """Get the default configuration file path."""
    return Path.home() / ".bitcoind_client" / "config.json"


def load_config(config_path: Path | None = None) -> ClientConfig:
    """
    Load configuration from file, falling back to environment and defaults.

    Args:
        config_path: Optional path to config file. Uses default if not provided.

    Returns:
        Loaded configuration object.
    """
    path = Path(config_path) if config_path is not None else get_config_path()

    if path.exists():
        try:
            with open(path) as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("config file must be a JSON object")
            data = _migrate_config(data)
            return ClientConfig(**convert_keys(data))
        except (json.JSONDecodeError, ValidationError, ValueError) as e:
            raise ValueError(
                f"Failed to load config from {path}: {e}. "
                "Fix the file or remove it to use defaults."
            ) from e

    return ClientConfig()


def read_cookie_file(path: Path | str) -> tuple[str, str]:
    """
    Read a Bitcoin Core ``.cookie`` file.

    The first line holds ``user:password``; the user is normally ``__cookie__``.
    """
    path = Path(path).expanduser()
    try:
        first_line = path.read_text(encoding="utf-8").splitlines()[0].strip()
    except IndexError:
        raise ValueError(f"cookie file is empty: {path}") from None
    except OSError as e:
        raise ValueError(f"cannot read cookie file {path}: {e.strerror or e}") from e
    user, sep, password = first_line.partition(":")
    if not sep or not user or not password:
        raise ValueError(f"malformed cookie file {path}: expected user:password")
    return user, password


def _migrate_config(data: dict) -> dict:
    """Migrate old config formats to current."""
    for old, new in LEGACY_KEYS.items():
        if old in data and new not in data:
            data[new] = data.pop(old)
    retry = data.get("retry")
    if not isinstance(retry, dict):
        retry = {}
    # Flat retry settings: maxRetries counts attempts, retryIntervalMs is a fixed delay
    if "maxRetries" in data and "maxAttempts" not in retry:
        retry["maxAttempts"] = data.pop("maxRetries")
    if "retryIntervalMs" in data and "baseDelaySeconds" not in retry:
        interval = data.pop("retryIntervalMs")
        if isinstance(interval, (int, float)):
            retry["baseDelaySeconds"] = float(interval) / 1000.0
            retry.setdefault("backoff", "fixed")
    if retry:
        data["retry"] = retry
    return data


def convert_keys(data: Any) -> Any:
    """Convert camelCase keys to snake_case for Pydantic."""
    if isinstance(data, dict):
        return {camel_to_snake(k): convert_keys(v) for k, v in data.items()}
    if isinstance(data, list):
        return [convert_keys(item) for item in data]
    return data


def convert_to_camel(data: Any) -> Any:
    """Convert snake_case keys to camelCase."""
    if isinstance(data, dict):
        return {snake_to_camel(k): convert_to_camel(v) for k, v in data.items()}
    if isinstance(data, list):
        return [convert_to_camel(item) for item in data]
    return data


def camel_to_snake(name: str) -> str:
    """Convert camelCase to snake_case."""
    result = []
    for i, char in enumerate(name):
        if char.isupper() and i > 0:
            result.append("_")
        result.append(char.lower())
    return "".join(result)


def snake_to_camel(name: str) -> str:
    """Convert snake_case to camelCase."""
    components = name.split("_")
    return components[0] + "".join(x.title() for x in components[1:])


def save_config(config: ClientConfig, config_path: Path | None = None) -> None:
    """
    Save configuration to file. The password is written only when set explicitly.

    Args:
        config: Configuration to save.
        config_path: Optional path to save to. Uses default if not provided.
    """
    path = Path(config_path) if config_path is not None else get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    data = config.model_dump(mode="json", exclude_none=True)
    if config.password is not None:
        data["password"] = config.password.get_secret_value()
    data = convert_to_camel(data)

    with open(path, "w") as f:
        json.dump(data, f, indent=2)
