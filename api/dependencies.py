import logging

import httpx
from fastapi import Request

from common.config import Settings, get_settings
from core.ports import DictionaryIO, LexiconIO, ModelClient
from infra.openai.chat_client import OpenAIChatClient
from infra.search.lexicon_repo import DisabledLexiconIO, SearchLexiconIO
from infra.wiktionary.dictionary_repo import WiktionaryIO


def get_http(request: Request) -> httpx.AsyncClient:
    return request.app.state.http


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_model_client(request: Request) -> ModelClient:
    # ConfigurationError surfaces as a 500 through the app's exception handler
    return OpenAIChatClient.from_settings(get_http(request), get_app_settings(request))


def get_lexicon(request: Request) -> LexiconIO:
    settings = get_app_settings(request)
    if not settings.lexicon_enabled:
        return DisabledLexiconIO()
    return SearchLexiconIO.from_settings(get_http(request), settings)


def get_dictionary(request: Request) -> DictionaryIO:
    return WiktionaryIO.from_settings(get_http(request), get_app_settings(request))


def load_settings() -> Settings:
    settings = get_settings()
    if not settings.lexicon_enabled:
        logging.warning("SEARCH_ENDPOINT/SEARCH_API_KEY not set, lexicon lookup disabled")
    return settings
