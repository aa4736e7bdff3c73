import logging
from dataclasses import dataclass, field
from typing import Any, Callable, TypeVar

from .config.settings import Settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class Container:
    """Components of one search session, built on first use."""

    _factories: dict[type, Callable[[], Any]] = field(default_factory=dict)
    _instances: dict[type, Any] = field(default_factory=dict)
    _transient: set[type] = field(default_factory=set)

    def register(
        self, interface: type[T], factory: Callable[[], T], singleton: bool = True
    ) -> None:
        """Register factory for interface.

        Args:
            interface: Interface type.
            factory: Factory function.
            singleton: Share one instance for the session. Transient
                interfaces get a fresh instance per resolve.
        """
        self._factories[interface] = factory
        if singleton:
            self._transient.discard(interface)
        else:
            self._transient.add(interface)

    def resolve(self, interface: type[T]) -> T:
        if interface in self._instances:
            return self._instances[interface]

        if interface not in self._factories:
            raise KeyError(f"No factory registered for {interface}")

        instance = self._factories[interface]()

        if interface not in self._transient:
            self._instances[interface] = instance

        return instance

    async def aclose(self) -> None:
        """End the session, closing built components that hold connections."""
        for interface, instance in list(self._instances.items()):
            close = getattr(instance, "aclose", None)
            if close is not None:
                await close()
                logger.debug(f"Closed {interface.__name__}")
        self._instances.clear()


def configure_container(settings: Settings) -> Container:
    """Build a container for one search session.

    Each call returns an independent container, so every session gets its own
    document index, history and orchestrator.

    Args:
        settings: Application settings.

    Returns:
        Configured container.
    """
    from .core.protocols.backend import SearchBackendProtocol
    from .core.protocols.normalizer import NormalizerProtocol
    from .core.protocols.vectorizer import VectorizerProtocol
    from .core.services.index_service import DocumentIndex
    from .core.services.ingest_service import IngestService
    from .core.services.orchestrator import SearchOrchestrator
    from .core.services.ranking_service import RankingEngine
    from .core.services.search_service import SearchService
    from .core.strategies.scoring import BlendPolicy, ScoreCutoffStrategy
    from .infrastructure.backends import HttpSearchBackend, LocalSearchBackend
    from .infrastructure.normalizers import TextNormalizer
    from .infrastructure.vectorizers import CharHistogramVectorizer

    container = Container()

    container.register(NormalizerProtocol, TextNormalizer)

    container.register(
        VectorizerProtocol, lambda: CharHistogramVectorizer(settings.vector_dimensions)
    )

    container.register(
        DocumentIndex,
        lambda: DocumentIndex(
            normalizer=container.resolve(NormalizerProtocol),
            vectorizer=container.resolve(VectorizerProtocol),
        ),
    )

    container.register(
        RankingEngine,
        lambda: RankingEngine(
            vectorizer=container.resolve(DocumentIndex).vectorizer,
            policy=BlendPolicy(
                vector_weight=settings.vector_weight,
                lexical_weight=settings.lexical_weight,
            ),
            snippet_window=settings.snippet_window,
            strategies=(
                [ScoreCutoffStrategy(settings.score_ratio)]
                if settings.score_ratio > 0
                else []
            ),
        ),
    )

    container.register(
        SearchService,
        lambda: SearchService(
            index=container.resolve(DocumentIndex),
            engine=container.resolve(RankingEngine),
        ),
    )

    container.register(
        IngestService,
        lambda: IngestService(
            search_service=container.resolve(SearchService),
            docs_path=settings.docs_path,
        ),
    )

    if settings.remote_search_url:
        container.register(
            SearchBackendProtocol,
            lambda: HttpSearchBackend(
                base_url=settings.remote_search_url,
                timeout=settings.remote_timeout_seconds,
            ),
        )
    else:
        container.register(
            SearchBackendProtocol,
            lambda: LocalSearchBackend(container.resolve(SearchService)),
        )

    container.register(
        SearchOrchestrator,
        lambda: SearchOrchestrator(
            backend=container.resolve(SearchBackendProtocol),
            debounce_seconds=settings.debounce_ms / 1000,
            history_limit=settings.history_limit,
        ),
    )

    logger.info("Container configured")
    return container
