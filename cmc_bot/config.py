"""Configuration management for the price bot.

Handles all application configuration including environment variables, the
YAML market data config file, and default settings. Provides structured
configuration classes for the bot and for the CoinMarketCap client.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings

DEFAULT_BASE_URL = "https://pro-api.coinmarketcap.com/v2"
DEFAULT_TIMEOUT_SECONDS = 10.0

# Environment variables the bot cannot start without
REQUIRED_ENV_VARS = ("TELEGRAM_BOT_TOKEN", "COINMARKETCAP_API_KEY")


class BotConfig(BaseSettings):
    """Main Telegram bot configuration.

    Attributes:
        bot_token: Telegram bot API token from environment.
        log_level: Root logging level name.
        polling_timeout: Long-polling timeout in seconds.
    """
    bot_token: str = Field(..., min_length=1, validation_alias="TELEGRAM_BOT_TOKEN")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    polling_timeout: int = 10

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level: {value}")
        return level


class MarketDataConfig(BaseSettings):
    """CoinMarketCap API settings.

    Attributes:
        api_key: CoinMarketCap Pro API key from environment.
        base_url: API root including the version segment.
        timeout: Total client-side timeout for one request, in seconds.
    """
    api_key: str = Field(..., min_length=1, validation_alias="COINMARKETCAP_API_KEY")
    base_url: str = Field(default=DEFAULT_BASE_URL, validation_alias="CMC_BASE_URL")
    timeout: float = Field(
        default=DEFAULT_TIMEOUT_SECONDS, gt=0, validation_alias="CMC_TIMEOUT"
    )


class ConfigError(RuntimeError):
    """Raised when required configuration is missing at startup.

    Attributes:
        missing: Names of the environment variables that are absent or empty.
    """

    def __init__(self, missing: list[str]):
        self.missing = missing
        lines = [
            f"{name} не установлен. Установите переменную окружения." for name in missing
        ]
        super().__init__("\n".join(lines))


class Config:
    """Application configuration manager.

    Loads the YAML market data file (when present) as a base layer and the
    environment on top of it. Environment values always win over the file.
    """

    def __init__(self, config_dir: Path | None = None):
        """Initialize configuration manager.

        Args:
            config_dir: Path to configuration directory, defaults to cmc_bot/config.

        Raises:
            ConfigError: If a required environment variable is missing or empty.
        """
        if config_dir is None:
            config_dir = Path(__file__).parent / "config"

        self.config_dir = Path(config_dir)
        file_data = self._load_market_data_file()

        missing: list[str] = []
        bot_defaults: dict[str, Any] = {}
        if "polling_timeout" in file_data:
            bot_defaults["polling_timeout"] = file_data["polling_timeout"]

        market_defaults: dict[str, Any] = {}
        if "base_url" in file_data:
            market_defaults["base_url"] = file_data["base_url"]
        if "timeout_seconds" in file_data:
            market_defaults["timeout"] = file_data["timeout_seconds"]

        try:
            self.bot = BotConfig(**_with_aliases(BotConfig, bot_defaults))
        except ValidationError as e:
            required = _missing_fields(e)
            if not required:
                raise
            missing.extend(required)

        try:
            self.market_data = MarketDataConfig(
                **_with_aliases(MarketDataConfig, market_defaults)
            )
        except ValidationError as e:
            required = _missing_fields(e)
            if not required:
                raise
            missing.extend(required)

        if missing:
            raise ConfigError(missing)

    def _load_market_data_file(self) -> dict[str, Any]:
        """Load market data settings from YAML configuration.

        Returns:
            Mapping of settings, empty if the file is absent.
        """
        path = self.config_dir / "market_data.yml"
        if not path.exists():
            return {}

        with open(path) as f:
            data = yaml.safe_load(f)

        return data or {}


def _with_aliases(settings_cls: type[BaseSettings], values: dict[str, Any]) -> dict[str, Any]:
    """Map field names to their validation aliases unless the env already sets them.

    Init kwargs take priority over the environment in pydantic-settings, so
    file values are only passed for keys the environment leaves unset.
    """
    env_keys = {key.upper() for key in os.environ}
    result: dict[str, Any] = {}
    for name, value in values.items():
        field = settings_cls.model_fields[name]
        key = field.validation_alias if isinstance(field.validation_alias, str) else name
        if key.upper() not in env_keys:
            result[key] = value
    return result


def _missing_fields(error: ValidationError) -> list[str]:
    """Return env var names of required fields that failed validation."""
    names = []
    for item in error.errors():
        loc = str(item["loc"][0]) if item["loc"] else ""
        if loc in REQUIRED_ENV_VARS and item["type"] in ("missing", "string_too_short"):
            names.append(loc)
    return names
