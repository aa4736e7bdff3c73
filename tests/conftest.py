"""Shared fixtures and test doubles."""

import asyncio
from datetime import datetime, timezone

import pytest

from docsearch.core.models.document import SourceKind
from docsearch.core.models.search import SearchHit, SearchResponse
from docsearch.core.services.index_service import DocumentIndex
from docsearch.core.services.ranking_service import RankingEngine
from docsearch.core.services.search_service import SearchService
from docsearch.infrastructure.normalizers import TextNormalizer
from docsearch.infrastructure.vectorizers import CharHistogramVectorizer


class FakeTimer:
    def __init__(self, delay, callback):
        self.delay = delay
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self):
        self.cancelled = True


class FakeScheduler:
    """Scheduler whose timers only fire when the test says so."""

    def __init__(self):
        self.timers: list[FakeTimer] = []

    def call_later(self, delay, callback):
        timer = FakeTimer(delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def pending(self) -> list[FakeTimer]:
        return [t for t in self.timers if not t.cancelled and not t.fired]

    def fire_pending(self) -> None:
        for timer in self.pending:
            timer.fired = True
            timer.callback()


class ControlledBackend:
    """Backend whose responses are resolved by the test, in any order."""

    def __init__(self):
        self.calls: list[str] = []
        self.filters: list = []
        self._futures: list[asyncio.Future] = []

    async def search(self, query: str, filters=None) -> SearchResponse:
        future = asyncio.get_running_loop().create_future()
        self.calls.append(query)
        self.filters.append(filters)
        self._futures.append(future)
        return await future

    def resolve(self, index: int, response: SearchResponse) -> None:
        self._futures[index].set_result(response)

    def fail(self, index: int, error: Exception) -> None:
        self._futures[index].set_exception(error)


class RecordingListener:
    def __init__(self):
        self.results: list[tuple[str, SearchResponse]] = []
        self.errors: list[tuple[str, str]] = []
        self.clears = 0

    def on_results(self, query, response):
        self.results.append((query, response))

    def on_error(self, query, message):
        self.errors.append((query, message))

    def on_clear(self):
        self.clears += 1


def make_hit(doc_id: str, score: float = 0.5) -> SearchHit:
    return SearchHit(
        id=doc_id,
        title=f"Doc {doc_id}",
        snippet="",
        lexical_score=0.0,
        vector_score=score,
        final_score=score,
        word_count=1,
        source_kind=SourceKind.TEXT,
        created_at=datetime.now(timezone.utc),
    )


def make_response(*doc_ids: str) -> SearchResponse:
    return SearchResponse(hits=[make_hit(d) for d in doc_ids])


async def settle() -> None:
    """Let freshly created tasks run up to their first await."""
    for _ in range(3):
        await asyncio.sleep(0)


@pytest.fixture
def normalizer():
    return TextNormalizer()


@pytest.fixture
def vectorizer():
    return CharHistogramVectorizer(128)


@pytest.fixture
def index(normalizer, vectorizer):
    return DocumentIndex(normalizer=normalizer, vectorizer=vectorizer)


@pytest.fixture
def engine(vectorizer):
    return RankingEngine(vectorizer=vectorizer)


@pytest.fixture
def search_service(index, engine):
    return SearchService(index=index, engine=engine)


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def backend():
    return ControlledBackend()


@pytest.fixture
def listener():
    return RecordingListener()
