from typing import Optional, Protocol

from domain.analysis.schema import DictionaryPage, LexiconEntry


class ModelClient(Protocol):
    async def complete(
        self, system: str, prompt: str, temperature: float
    ) -> str: ...


class LexiconIO(Protocol):
    async def lookup(self, search_key: str) -> Optional[LexiconEntry]: ...


class DictionaryIO(Protocol):
    async def fetch_page(self, title: str) -> Optional[DictionaryPage]: ...
