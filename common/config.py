import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

from common.constants import (
    DEFAULT_OPENAI_BASE_URL,
    DEFAULT_OPENAI_MODEL,
    DEFAULT_SEARCH_INDEX,
    DEFAULT_WIKTIONARY_API_URL,
)
from core.errors import ConfigurationError

load_dotenv()


class Settings(BaseModel):
    openai_api_key: Optional[str] = None
    openai_base_url: str = DEFAULT_OPENAI_BASE_URL
    openai_model: str = DEFAULT_OPENAI_MODEL

    search_endpoint: Optional[str] = None
    search_api_key: Optional[str] = None
    search_index: str = DEFAULT_SEARCH_INDEX

    wiktionary_api_url: str = DEFAULT_WIKTIONARY_API_URL

    @property
    def lexicon_enabled(self) -> bool:
        return bool(self.search_endpoint and self.search_api_key)

    def require_openai_key(self) -> str:
        if not self.openai_api_key or not self.openai_api_key.strip():
            raise ConfigurationError("OPENAI_API_KEY is not configured")
        return self.openai_api_key


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


def get_settings() -> Settings:
    """
    Reads settings from environment (and .env if present).
    Only the OpenAI key is mandatory; it is checked when the model client is built.
    """
    return Settings(
        openai_api_key=_env("OPENAI_API_KEY"),
        openai_base_url=_env("OPENAI_BASE_URL", DEFAULT_OPENAI_BASE_URL),
        openai_model=_env("OPENAI_MODEL", DEFAULT_OPENAI_MODEL),
        search_endpoint=_env("SEARCH_ENDPOINT"),
        search_api_key=_env("SEARCH_API_KEY"),
        search_index=_env("SEARCH_INDEX", DEFAULT_SEARCH_INDEX),
        wiktionary_api_url=_env("WIKTIONARY_API_URL", DEFAULT_WIKTIONARY_API_URL),
    )
