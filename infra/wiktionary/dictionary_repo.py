import logging
from typing import Any, Optional

import httpx

from common.config import Settings
from common.constants import (
    WIKTIONARY_MISSING_PAGE_ID,
    WIKTIONARY_TIMEOUT_S,
    WIKTIONARY_USER_AGENT,
)
from domain.analysis.schema import DictionaryPage


def _page_wikitext(body: Any) -> Optional[str]:
    """
    Pulls the main slot content out of a MediaWiki query response.
    Page id -1 (or a "missing" marker) means the title does not exist.
    """
    query = body.get("query")
    if not isinstance(query, dict):
        return None
    pages = query.get("pages")
    if not isinstance(pages, dict):
        return None
    for page_id, page in pages.items():
        if not isinstance(page, dict):
            return None
        if page_id == WIKTIONARY_MISSING_PAGE_ID or "missing" in page:
            return None
        revisions = page.get("revisions")
        if not isinstance(revisions, list) or not revisions:
            return None
        rev = revisions[0]
        if not isinstance(rev, dict):
            return None
        slots = rev.get("slots")
        slot = slots.get("main") if isinstance(slots, dict) else None
        if not isinstance(slot, dict):
            slot = rev
        content = slot.get("*", slot.get("content"))
        return content if isinstance(content, str) else None
    return None


class WiktionaryIO:
    def __init__(
        self,
        http: httpx.AsyncClient,
        api_url: str,
        timeout: float = WIKTIONARY_TIMEOUT_S,
    ):
        self.http = http
        self.api_url = api_url
        self.timeout = timeout

    @classmethod
    def from_settings(cls, http: httpx.AsyncClient, settings: Settings):
        return cls(http, api_url=settings.wiktionary_api_url)

    async def fetch_page(self, title: str) -> Optional[DictionaryPage]:
        if not title:
            return None
        params = {
            "action": "query",
            "prop": "revisions",
            "rvprop": "content",
            "rvslots": "main",
            "format": "json",
            "titles": title,
        }
        try:
            resp = await self.http.get(
                self.api_url,
                params=params,
                headers={"User-Agent": WIKTIONARY_USER_AGENT},
                timeout=self.timeout,
            )
            resp.raise_for_status()
            body = resp.json()
        except httpx.HTTPStatusError as e:
            logging.warning(
                f"Wiktionary fetch failed for {title!r}: {e.response.status_code}"
            )
            return None
        except (httpx.TransportError, ValueError) as e:
            logging.warning(f"Wiktionary fetch failed for {title!r}: {e!r}")
            return None

        if not isinstance(body, dict):
            return None
        wikitext = _page_wikitext(body)
        if wikitext is None:
            logging.info(f"Wiktionary page not found: {title!r}")
            return None
        return DictionaryPage(title=title, wikitext=wikitext)
