"""Translator settings loaded from environment variables."""

import logging

from pydantic import field_validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


class TranslatorSettings(BaseSettings):
    """Configuration for the Translator token provider.

    Values are read from ``TRANSLATOR_*`` environment variables
    (case-insensitive) and optionally from a ``.env`` file in the working
    directory.
    """

    subscription_key: str = ""
    region: str = ""
    timeout: float = 30.0

    model_config = {
        "env_prefix": "TRANSLATOR_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @field_validator("subscription_key", "region", mode="before")
    @classmethod
    def _strip(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip()
        return value
