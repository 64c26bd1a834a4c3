"""Configuration management for llmterminal.

Loads settings from a YAML configuration file with environment variable
overrides for sensitive values (API keys). Supports .env files.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, SecretStr
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config/llmterminal.yaml")


class LegacyCompletionConfig(BaseModel):
    """Request parameters for the single-string completions endpoint."""

    endpoint: str = Field(default="https://api.anthropic.com/v1/completions")
    model: str = Field(default="claude-3-opus-20240229")
    temperature: float = Field(default=0.0, ge=0.0)
    max_tokens: int = Field(default=100, gt=0)
    top_p: float = Field(default=1.0, ge=0.0, le=1.0)
    frequency_penalty: float = Field(default=0.0)
    presence_penalty: float = Field(default=0.0)
    stop: list[str] = Field(default_factory=lambda: ["\n"])


class MessageCompletionConfig(BaseModel):
    """Request parameters for the structured messages endpoint."""

    endpoint: str = Field(default="https://api.anthropic.com/v1/messages")
    model: str = Field(default="claude-3-opus-20240229")
    temperature: float = Field(default=0.0, ge=0.0)
    max_tokens: int = Field(default=1024, gt=0)
    api_version: str = Field(default="2023-06-01")


class PromptConfig(BaseModel):
    persona_override: str | None = Field(default=None)


class TransportConfig(BaseModel):
    timeout: float = Field(default=30.0, gt=0)


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO")
    format: str = Field(
        default="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    file: str | None = Field(default=None)


class Settings(BaseSettings):
    """Root configuration for the llmterminal system.

    Loads from YAML file and supports environment variable overrides.
    Reads .env files automatically. Values passed as keyword arguments
    rank below environment variables.
    """

    model_config = {
        "env_prefix": "LLMTERMINAL_",
        "env_nested_delimiter": "__",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    # API Keys
    anthropic_api_key: SecretStr = Field(default=SecretStr(""))

    # Which upstream wire protocol to talk
    adapter: Literal["legacy", "messages"] = Field(default="messages")

    # Configuration sections
    legacy: LegacyCompletionConfig = Field(default_factory=LegacyCompletionConfig)
    messages: MessageCompletionConfig = Field(default_factory=MessageCompletionConfig)
    prompt: PromptConfig = Field(default_factory=PromptConfig)
    transport: TransportConfig = Field(default_factory=TransportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Rank keyword arguments (the YAML file) below the environment.

        Nested sections are merged key by key, so a single
        ``LLMTERMINAL_MESSAGES__MODEL`` keeps the rest of the YAML
        ``messages`` section.
        """
        return env_settings, dotenv_settings, init_settings, file_secret_settings


def load_settings(config_path: Path | str | None = None) -> Settings:
    """Load settings from YAML + .env + environment variables.

    Priority: env vars > .env file > YAML file > defaults
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    _load_dotenv()

    yaml_data = {}
    if path.exists():
        with open(path) as f:
            yaml_data = yaml.safe_load(f) or {}
        logger.info("Loaded configuration from %s", path)
    else:
        logger.warning("Config file %s not found, using defaults + env vars", path)

    _apply_env_overrides(yaml_data)

    return Settings(**yaml_data)


def _load_dotenv() -> None:
    """Load .env file into os.environ if it exists."""
    env_path = Path(".env")
    if not env_path.exists():
        return
    with open(env_path) as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" in line:
                key, _, value = line.partition("=")
                key = key.strip()
                value = value.strip()
                if not os.environ.get(key):
                    os.environ[key] = value


def _apply_env_overrides(yaml_data: dict) -> None:
    """Apply environment variable overrides for non-prefixed vars."""
    anthropic_key = os.environ.get("ANTHROPIC_API_KEY", "")
    if anthropic_key and not os.environ.get("LLMTERMINAL_ANTHROPIC_API_KEY"):
        yaml_data["anthropic_api_key"] = anthropic_key
