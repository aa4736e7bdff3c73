"""Tests for the local and HTTP search backends."""

import json
from datetime import timedelta

import httpx
import pytest

from docsearch.core.errors import DimensionalityMismatchError, QueryExecutionError
from docsearch.core.models.document import SourceKind
from docsearch.core.models.search import SearchFilters
from docsearch.infrastructure.backends import HttpSearchBackend, LocalSearchBackend

REMOTE_PAYLOAD = {
    "results": [
        {
            "id": "doc-1",
            "title": "Remote fox",
            "snippet": "the quick brown fox",
            "lexicalScore": 1.0,
            "vectorScore": 0.8,
            "finalScore": 0.8,
            "metadata": {
                "wordCount": 4,
                "sourceKind": "html",
                "createdAt": "2024-05-01T12:00:00+00:00",
            },
            "tags": ["html", "Foxes"],
        }
    ],
    "analytics": {
        "execution_time_ms": 3.5,
        "total_results": 1,
        "max_score": 0.8,
        "vector_query": True,
        "result_distribution": {"html": 1},
        "score_ranges": {"0.8-1.0": 1},
    },
}


class RaisingSearchService:
    def __init__(self, error):
        self._error = error

    def search(self, query, **kwargs):
        raise self._error


def make_http_backend(handler):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpSearchBackend("http://search.test/", client=client)


class TestLocalSearchBackend:

    @pytest.mark.asyncio
    async def test_returns_service_response(self, search_service):
        entry = search_service.ingest("the quick brown fox", SourceKind.TEXT)
        backend = LocalSearchBackend(search_service)

        response = await backend.search("fox")

        assert [h.id for h in response.hits] == [entry.id]
        assert response.analytics.total_results == 1

    @pytest.mark.asyncio
    async def test_unexpected_errors_become_query_errors(self):
        backend = LocalSearchBackend(RaisingSearchService(RuntimeError("index gone")))

        with pytest.raises(QueryExecutionError) as exc_info:
            await backend.search("fox")

        assert exc_info.value.query == "fox"
        assert "index gone" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_dimensionality_mismatch_propagates(self):
        backend = LocalSearchBackend(
            RaisingSearchService(DimensionalityMismatchError(expected=128, actual=64))
        )

        with pytest.raises(DimensionalityMismatchError):
            await backend.search("fox")

    @pytest.mark.asyncio
    async def test_filters_restrict_kinds_and_vector_use(self, search_service):
        search_service.ingest("fox in text", SourceKind.TEXT)
        html = search_service.ingest("<p>fox in html</p>", SourceKind.HTML)
        backend = LocalSearchBackend(search_service)

        response = await backend.search(
            "fox", SearchFilters(source_kinds=("html",), use_vector=False)
        )

        assert [h.id for h in response.hits] == [html.id]
        assert response.hits[0].vector_score == 0.0
        assert response.hits[0].final_score == response.hits[0].lexical_score
        assert response.analytics.vector_query is False


class TestHttpSearchBackend:

    @pytest.mark.asyncio
    async def test_parses_results_and_analytics(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=REMOTE_PAYLOAD)

        backend = make_http_backend(handler)
        response = await backend.search("fox")
        await backend.aclose()

        assert str(seen[0].url) == "http://search.test/api/search"
        assert seen[0].method == "POST"
        assert json.loads(seen[0].content) == {
            "query": "fox",
            "filters": {"contentType": ["text", "html"]},
            "options": {"useVector": True},
        }

        hit = response.hits[0]
        assert hit.id == "doc-1"
        assert hit.title == "Remote fox"
        assert hit.source_kind is SourceKind.HTML
        assert hit.word_count == 4
        assert hit.tags == ["html", "Foxes"]
        assert hit.to_dict() == REMOTE_PAYLOAD["results"][0]

        assert response.analytics.total_results == 1
        assert response.analytics.result_distribution == {"html": 1}

    @pytest.mark.asyncio
    async def test_missing_analytics(self):
        backend = make_http_backend(lambda request: httpx.Response(200, json={"results": []}))

        response = await backend.search("fox")

        assert response.hits == []
        assert response.analytics is None

    @pytest.mark.asyncio
    async def test_error_status(self):
        backend = make_http_backend(lambda request: httpx.Response(503))

        with pytest.raises(QueryExecutionError) as exc_info:
            await backend.search("fox")

        assert "503" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_connection_failure(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        backend = make_http_backend(handler)

        with pytest.raises(QueryExecutionError) as exc_info:
            await backend.search("fox")

        assert exc_info.value.query == "fox"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "response",
        [
            httpx.Response(200, content=b"<html>not json</html>"),
            httpx.Response(200, json={"results": ["not-a-hit"]}),
            httpx.Response(200, json=[1, 2, 3]),
        ],
    )
    async def test_malformed_payload(self, response):
        backend = make_http_backend(lambda request: response)

        with pytest.raises(QueryExecutionError):
            await backend.search("fox")

    @pytest.mark.asyncio
    async def test_filters_and_options_in_request(self):
        seen = []

        def handler(request):
            seen.append(json.loads(request.content))
            return httpx.Response(200, json={"results": []})

        backend = make_http_backend(handler)
        await backend.search(
            "fox", SearchFilters(source_kinds=(SourceKind.HTML,), use_vector=False)
        )

        assert seen[0] == {
            "query": "fox",
            "filters": {"contentType": ["html"]},
            "options": {"useVector": False},
        }

    @pytest.mark.asyncio
    async def test_javascript_utc_timestamps(self):
        hit = dict(REMOTE_PAYLOAD["results"][0])
        hit["metadata"] = {**hit["metadata"], "createdAt": "2024-05-01T12:00:00.000Z"}
        backend = make_http_backend(
            lambda request: httpx.Response(200, json={"results": [hit]})
        )

        response = await backend.search("fox")

        created_at = response.hits[0].created_at
        assert created_at.utcoffset() == timedelta(0)
        assert (created_at.year, created_at.hour) == (2024, 12)
