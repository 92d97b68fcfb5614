"""Configuration management for the merch design enhancer."""

import os
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError
from dotenv import load_dotenv

from ..models.enums import ProviderName
from .errors import ConfigurationError, UnsupportedProviderError
from .logger import get_logger

logger = get_logger(__name__)

# Load environment variables
load_dotenv()

DEFAULT_CONFIG_PATH = Path("config/providers.yaml")


class Config(BaseModel):
    """Library configuration sourced from environment and YAML."""

    model_config = ConfigDict(populate_by_name=True)

    # API Keys
    google_ai_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("GOOGLE_AI_API_KEY", "GEMINI_API_KEY", "google_ai_api_key"),
        repr=False,
    )
    openai_api_key: str = Field(default="", alias="OPENAI_API_KEY", repr=False)
    stability_api_key: str = Field(default="", alias="STABILITY_API_KEY", repr=False)
    replicate_api_token: str = Field(default="", alias="REPLICATE_API_TOKEN", repr=False)

    # Application Settings
    default_provider: ProviderName = Field(default=ProviderName.NANOBANANA, alias="MERCH_PROVIDER")
    # Informational only: get_logger reads LOG_LEVEL from the environment itself
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Timeout Settings
    timeout_seconds: float = Field(default=120.0, gt=0, alias="PROVIDER_TIMEOUT_SECONDS")

    # Replicate polling bounds
    replicate_poll_interval_seconds: float = Field(
        default=1.0, ge=0, alias="REPLICATE_POLL_INTERVAL_SECONDS"
    )
    replicate_max_wait_seconds: float = Field(
        default=600.0, gt=0, alias="REPLICATE_MAX_WAIT_SECONDS"
    )
    replicate_max_polls: int = Field(default=600, gt=0, alias="REPLICATE_MAX_POLLS")

    def api_key_for(self, provider: Union[ProviderName, str]) -> str:
        """Return the configured credential for a provider."""
        try:
            provider = ProviderName(provider)
        except ValueError:
            raise UnsupportedProviderError(provider, [p.value for p in ProviderName])

        return {
            ProviderName.NANOBANANA: self.google_ai_api_key,
            ProviderName.OPENAI: self.openai_api_key,
            ProviderName.STABILITY: self.stability_api_key,
            ProviderName.REPLICATE: self.replicate_api_token,
        }[provider]


# Global config instance
_config: Optional[Config] = None


def load_config(path: Optional[Union[str, Path]] = None) -> Config:
    """
    Load configuration from environment and an optional YAML file.

    Environment variables take precedence over values in the YAML file.

    Args:
        path: YAML file to read (defaults to config/providers.yaml)

    Returns:
        Config instance

    Raises:
        ConfigurationError: If configuration is invalid
    """
    global _config

    yaml_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    file_config = {}

    if yaml_path.exists():
        try:
            with open(yaml_path, "r", encoding="utf-8") as f:
                file_config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to read {yaml_path}: {e}") from e
        if not isinstance(file_config, dict):
            raise ConfigurationError(f"{yaml_path} must contain a mapping")
    elif path is not None:
        raise ConfigurationError(f"Config file not found at {yaml_path}")

    config_data = {
        **file_config,
        **os.environ,
    }

    try:
        _config = Config(**config_data)
    except ValidationError as e:
        raise ConfigurationError(f"Failed to load configuration: {e}") from e

    logger.info(
        "Configuration loaded successfully",
        extra={
            "config_file": str(yaml_path) if file_config else None,
            "default_provider": _config.default_provider.value,
        }
    )

    return _config


def get_config() -> Config:
    """
    Get the current configuration instance, loading it on first use.

    Returns:
        Config instance
    """
    if _config is None:
        return load_config()
    return _config
