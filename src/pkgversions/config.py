import os
from pathlib import Path
from typing import Dict, Optional

from pydantic import BaseModel, ValidationError, field_validator

from .domain.errors import ConfigError
from .resolution.encoders import Encoding
from .resolution.resolver import FailurePolicy

CONFIG_DIR = Path.home() / ".pkgversions"
CONFIG_FILE = CONFIG_DIR / "config"

DEFAULT_REGISTRY_URL = "https://console-api.enforce.dev"

REGISTRY_URL = "PKGVERSIONS_REGISTRY_URL"
FAILURE_POLICY = "PKGVERSIONS_FAILURE_POLICY"
ENCODING = "PKGVERSIONS_ENCODING"
TIMEOUT = "PKGVERSIONS_TIMEOUT"
TOKEN = "PKGVERSIONS_TOKEN"

KNOWN_KEYS = (REGISTRY_URL, FAILURE_POLICY, ENCODING, TIMEOUT, TOKEN)


class Settings(BaseModel):
    """resolved configuration for a provider."""
    registry_url: str = DEFAULT_REGISTRY_URL
    failure_policy: FailurePolicy = FailurePolicy.STRICT
    encoding: Encoding = Encoding.STRUCTURED
    timeout: float = 30.0
    token: Optional[str] = None

    @field_validator("registry_url")
    @classmethod
    def _check_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"registry url must be http(s), got '{v}'")
        return v.rstrip("/")

    @field_validator("timeout")
    @classmethod
    def _check_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeout must be positive")
        return v


def read_config() -> Dict[str, str]:
    """read all key=value pairs from the config file."""
    config = {}
    if not CONFIG_FILE.exists():
        return config

    try:
        with open(CONFIG_FILE, "r") as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                key, value = line.split("=", 1)
                config[key.strip()] = value.strip()
    except (IOError, PermissionError, OSError):
        # if we can't read the file, treat as not configured
        return {}
    return config


def get_value(key: str) -> Optional[str]:
    """get a config value; environment variables win over the config file."""
    if os.environ.get(key):
        return os.environ[key]
    return read_config().get(key)


def set_value(key: str, value: str):
    """set a value in the config file, preserving other config values."""
    if key not in KNOWN_KEYS:
        raise ConfigError(f"unknown config key '{key}'. Known keys: {', '.join(KNOWN_KEYS)}")

    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    config = read_config()
    config[key] = value

    try:
        with open(CONFIG_FILE, "w") as f:
            for k, v in config.items():
                f.write(f"{k}={v}\n")
    except (IOError, PermissionError, OSError) as e:
        raise RuntimeError(f"failed to write config file: {e}") from e


def load_settings(**overrides) -> Settings:
    """
    build Settings from the config file, the environment and explicit overrides.

    overrides with a value of None are ignored.

    raises:
        ConfigError: if any value is invalid
    """
    values = {}
    for field, key in (
        ("registry_url", REGISTRY_URL),
        ("failure_policy", FAILURE_POLICY),
        ("encoding", ENCODING),
        ("timeout", TIMEOUT),
        ("token", TOKEN),
    ):
        value = get_value(key)
        if value:
            values[field] = value

    values.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return Settings(**values)
    except ValidationError as e:
        raise ConfigError(f"invalid configuration: {e}") from e
