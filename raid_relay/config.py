import os
import re
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from raid_relay.errors import ConfigError

load_dotenv()

# Logging format: "pretty" for colorized console, "json" for structured JSON.
LOG_FORMAT = os.getenv("LOG_FORMAT", "pretty")

WEBHOOK_PATTERN = re.compile(r"https://(?:[\w-]+\.)?discord\.com/api/webhooks/\d+/[\w-]+")

DEFAULT_DIRECTORY_BASE_URL = "https://api.wynncraft.com/v3/guild"


class Settings(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    webhook_url: str
    guild: str
    cooldown_seconds: float = 60.0
    cooldown_stripes: int = 32
    membership_ttl_seconds: float = 600.0
    directory_base_url: str = DEFAULT_DIRECTORY_BASE_URL
    http_timeout_seconds: float = 15.0
    host: str = "0.0.0.0"
    port: int = 8080
    log_format: Literal["pretty", "json"] = "pretty"

    @field_validator("webhook_url")
    @classmethod
    def _check_webhook_url(cls, value: str) -> str:
        if not WEBHOOK_PATTERN.fullmatch(value):
            raise ValueError("must be a Discord webhook URL")
        return value

    @field_validator("guild")
    @classmethod
    def _check_guild(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value

    @field_validator("cooldown_seconds", "membership_ttl_seconds")
    @classmethod
    def _check_non_negative(cls, value: float) -> float:
        if value < 0:
            raise ValueError("must not be negative")
        return value

    @field_validator("http_timeout_seconds")
    @classmethod
    def _check_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("must be greater than 0")
        return value

    @field_validator("cooldown_stripes")
    @classmethod
    def _check_stripes(cls, value: int) -> int:
        if value < 1:
            raise ValueError("must be at least 1")
        return value


# Settings field -> environment variable. Only set variables are passed on so
# the model defaults apply to the rest.
_ENV_VARS = {
    "webhook_url": "DISCORD_WEBHOOK_URL",
    "guild": "GUILD",
    "cooldown_seconds": "COOLDOWN_SECONDS",
    "cooldown_stripes": "COOLDOWN_STRIPES",
    "membership_ttl_seconds": "MEMBERSHIP_TTL_SECONDS",
    "directory_base_url": "DIRECTORY_BASE_URL",
    "http_timeout_seconds": "HTTP_TIMEOUT_SECONDS",
    "host": "HOST",
    "port": "PORT",
    "log_format": "LOG_FORMAT",
}


def load_settings(environ=None) -> Settings:
    """Build settings from the environment, raising ConfigError when invalid."""
    environ = os.environ if environ is None else environ

    missing = [
        var for var in ("DISCORD_WEBHOOK_URL", "GUILD") if not environ.get(var)
    ]
    if missing:
        raise ConfigError(f"Missing required environment variable(s): {', '.join(missing)}")

    values = {
        field: environ[var] for field, var in _ENV_VARS.items() if environ.get(var)
    }
    try:
        return Settings(**values)
    except ValidationError as e:
        problems = "; ".join(
            f"{_ENV_VARS[err['loc'][0]]}: {err['msg']}" for err in e.errors()
        )
        raise ConfigError(f"Invalid configuration: {problems}") from e
