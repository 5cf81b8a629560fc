import asyncio

import httpx
import pytest

from adapters.definition_sources import FreeDictionarySource, WiktionarySource
from adapters.http_client import RetryPolicy, RetryingFetcher
from core.domain.models import VerdictSource
from core.interfaces.definition_source import DefinitionSource


async def _noop_sleep(_seconds: float) -> None:
    return None


def _lookup(source_cls, handler, word="crane"):
    async def go():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            fetcher = RetryingFetcher(client, policy=RetryPolicy(retries=1), sleep=_noop_sleep)
            source = source_cls(fetcher, base_url="https://dict.example.test/entries/")
            return await source.lookup(word)

    return asyncio.run(go())


def test_sources_implement_protocol():
    fetcher = RetryingFetcher(httpx.AsyncClient())
    assert isinstance(FreeDictionarySource(fetcher), DefinitionSource)
    assert isinstance(WiktionarySource(fetcher), DefinitionSource)
    assert FreeDictionarySource.source is VerdictSource.PRIMARY
    assert WiktionarySource.source is VerdictSource.FALLBACK


def test_free_dictionary_accepts_entry_with_meanings():
    paths = []

    def handler(request):
        paths.append(request.url.path)
        return httpx.Response(200, json=[{"word": "crane", "meanings": [{"partOfSpeech": "noun"}]}])

    result = _lookup(FreeDictionarySource, handler)
    assert result.ok is True
    assert paths == ["/entries/crane"]


def test_free_dictionary_accepts_any_entry_with_meanings():
    def handler(request):
        return httpx.Response(200, json=[{"meanings": []}, {"meanings": [{"partOfSpeech": "verb"}]}])

    assert _lookup(FreeDictionarySource, handler).ok is True


def test_free_dictionary_rejects_empty_meanings():
    def handler(request):
        return httpx.Response(200, json=[{"word": "crane", "meanings": []}])

    result = _lookup(FreeDictionarySource, handler)
    assert result.ok is False
    assert result.reason == "no_meanings"


def test_free_dictionary_not_found():
    def handler(request):
        return httpx.Response(404, json={"title": "No Definitions Found"})

    result = _lookup(FreeDictionarySource, handler)
    assert result.ok is False
    assert result.reason == "http_404"


def test_free_dictionary_non_json_body():
    def handler(request):
        return httpx.Response(200, text="<html>oops</html>")

    result = _lookup(FreeDictionarySource, handler)
    assert result.ok is False
    assert result.reason == "non_json_response"


def test_exhausted_transport_errors_become_tier_failure():
    def handler(request):
        raise httpx.ConnectError("connection reset", request=request)

    result = _lookup(FreeDictionarySource, handler)
    assert result.ok is False
    assert result.reason == "request_failed:ConnectError"


def test_exhausted_429_is_tier_failure():
    def handler(request):
        return httpx.Response(429, headers={"Retry-After": "0"})

    result = _lookup(WiktionarySource, handler)
    assert result.ok is False
    assert result.reason == "http_429"


def test_wiktionary_requires_english_entries():
    def english(request):
        return httpx.Response(200, json={"en": [{"partOfSpeech": "Noun", "definitions": []}]})

    def french_only(request):
        return httpx.Response(200, json={"fr": [{"partOfSpeech": "Nom"}]})

    assert _lookup(WiktionarySource, english).ok is True
    result = _lookup(WiktionarySource, french_only)
    assert result.ok is False
    assert result.reason == "no_english_entries"


def test_programming_errors_are_not_swallowed():
    def handler(request):
        raise KeyError("bug")

    with pytest.raises(KeyError):
        _lookup(WiktionarySource, handler)
