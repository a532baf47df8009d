import asyncio
import json

import httpx

from domain.analysis.schema import LexiconEntry
from infra.search.lexicon_repo import DisabledLexiconIO, SearchLexiconIO


def _lookup(handler, key="книга"):
    async def run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
            lexicon = SearchLexiconIO(
                http,
                endpoint="https://search.example.net/",
                api_key="search-key",
                index="russian-words",
            )
            return await lexicon.lookup(key)

    return asyncio.run(run())


def test_lookup_reads_top_hit_only():
    # Setup
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={
                "value": [
                    {"@search.score": 3.1, "BaseWord": "книга", "Translation": "book"},
                    {"@search.score": 1.2, "BaseWord": "книжка", "Translation": "booklet"},
                ]
            },
        )

    # Execute
    entry = _lookup(handler)

    # Assertions
    assert entry == LexiconEntry(base_word="книга", translation="book")
    request = seen[0]
    assert request.url.path == "/indexes/russian-words/docs/search"
    assert request.url.params["api-version"] == "2023-11-01"
    assert request.headers["api-key"] == "search-key"
    assert json.loads(request.content) == {"search": "книга", "top": 1}


def test_partial_top_hit_is_no_match():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={
                "value": [
                    {"BaseWord": "книга", "Translation": ""},
                    {"BaseWord": "книжка", "Translation": "booklet"},
                ]
            },
        )

    assert _lookup(handler) is None


def test_empty_result_is_no_match():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"value": []})

    assert _lookup(handler) is None


def test_search_failures_are_absorbed():
    def bad_status(request: httpx.Request) -> httpx.Response:
        return httpx.Response(403, text="forbidden")

    def unreachable(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    def not_json(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>")

    assert _lookup(bad_status) is None
    assert _lookup(unreachable) is None
    assert _lookup(not_json) is None


def test_disabled_lexicon_never_matches():
    assert asyncio.run(DisabledLexiconIO().lookup("книга")) is None


def test_unexpected_body_shape_is_no_match():
    def value_is_object(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"value": {"BaseWord": "книга", "Translation": "book"}})

    def body_is_list(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=[{"BaseWord": "книга"}])

    def hit_is_string(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"value": ["книга"]})

    assert _lookup(value_is_object) is None
    assert _lookup(body_is_list) is None
    assert _lookup(hit_is_string) is None
