import logging
from typing import Any, Optional

import httpx

from common.config import Settings
from common.constants import (
    LEXICON_BASE_WORD_FIELD,
    LEXICON_TIMEOUT_S,
    LEXICON_TRANSLATION_FIELD,
    SEARCH_API_VERSION,
)
from domain.analysis.schema import LexiconEntry


def _top_hit_entry(body: Any) -> Optional[LexiconEntry]:
    """
    Only the top ranked document is read, and only if it has both fields.
    """
    if not isinstance(body, dict):
        return None
    docs = body.get("value")
    if not isinstance(docs, list) or not docs or not isinstance(docs[0], dict):
        return None

    top = docs[0]
    base_word = top.get(LEXICON_BASE_WORD_FIELD)
    translation = top.get(LEXICON_TRANSLATION_FIELD)
    if not isinstance(base_word, str) or not isinstance(translation, str):
        return None
    if not base_word.strip() or not translation.strip():
        return None
    return LexiconEntry(base_word=base_word.strip(), translation=translation.strip())


class SearchLexiconIO:
    """
    Curated lexicon in an Azure Cognitive Search index.
    Every failure is absorbed as "no match".
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        endpoint: str,
        api_key: str,
        index: str,
        timeout: float = LEXICON_TIMEOUT_S,
    ):
        self.http = http
        self.api_key = api_key
        self.url = f"{endpoint.rstrip('/')}/indexes/{index}/docs/search"
        self.timeout = timeout

    @classmethod
    def from_settings(cls, http: httpx.AsyncClient, settings: Settings):
        return cls(
            http,
            endpoint=settings.search_endpoint,
            api_key=settings.search_api_key,
            index=settings.search_index,
        )

    async def lookup(self, search_key: str) -> Optional[LexiconEntry]:
        if not search_key:
            return None
        try:
            resp = await self.http.post(
                self.url,
                params={"api-version": SEARCH_API_VERSION},
                json={"search": search_key, "top": 1},
                headers={"api-key": self.api_key},
                timeout=self.timeout,
            )
            resp.raise_for_status()
            body = resp.json()
        except httpx.HTTPStatusError as e:
            logging.warning(
                f"Lexicon search failed for {search_key!r}: {e.response.status_code}"
            )
            return None
        except (httpx.TransportError, ValueError) as e:
            logging.warning(f"Lexicon search failed for {search_key!r}: {e!r}")
            return None

        entry = _top_hit_entry(body)
        if entry is None:
            logging.info(f"No lexicon match for {search_key!r}")
        else:
            logging.info(f"Lexicon match for {search_key!r}: {entry.base_word}")
        return entry


class DisabledLexiconIO:
    """Used when search credentials are not configured."""

    async def lookup(self, search_key: str) -> Optional[LexiconEntry]:
        return None
