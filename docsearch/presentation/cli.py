
import asyncio
import logging
import sys

from docsearch.config.settings import settings
from docsearch.container import Container, configure_container
from docsearch.core.models.search import SearchResponse
from docsearch.core.services.ingest_service import IngestService
from docsearch.core.services.orchestrator import SearchOrchestrator

logger = logging.getLogger(__name__)


class ConsoleListener:
    """Prints orchestrator updates to stdout."""

    def on_results(self, query: str, response: SearchResponse) -> None:
        if not response.hits:
            print(f"No documents match '{query}'")
            return

        for i, hit in enumerate(response.hits, 1):
            print(
                f"[{i}] {hit.title}  final={hit.final_score:.3f} "
                f"vector={hit.vector_score:.3f} lexical={hit.lexical_score:.3f}"
            )
            print(f"    {hit.snippet[:240]}")

        if response.analytics:
            print(
                f"{response.analytics.total_results} results in "
                f"{response.analytics.execution_time_ms:.1f}ms"
            )

    def on_error(self, query: str, message: str) -> None:
        print(f"Search failed: {message}")

    def on_clear(self) -> None:
        pass


def _ingest(container: Container) -> int:
    ingest_service = container.resolve(IngestService)
    return ingest_service.run()


def cmd_ingest():
    """Ingest command - index documents and report the count."""
    container = configure_container(settings)
    count = _ingest(container)
    logger.info(f"Indexed {count} documents")


def cmd_search(query: str):
    """Search command - index documents, then run one query."""
    container = configure_container(settings)
    _ingest(container)

    orchestrator = container.resolve(SearchOrchestrator)
    orchestrator.listener = ConsoleListener()

    async def run() -> None:
        try:
            await orchestrator.search_now(query)
        finally:
            await container.aclose()

    asyncio.run(run())


def main():
    """CLI entry point."""
    logging.basicConfig(level=settings.log_level, format="%(message)s")

    if len(sys.argv) < 2:
        print("Usage: python -m docsearch.presentation.cli <command>")
        print("Commands: ingest, search <query>")
        sys.exit(1)

    command = sys.argv[1]

    if command == "ingest":
        cmd_ingest()
    elif command == "search":
        query = " ".join(sys.argv[2:]).strip()
        if not query:
            print("Usage: python -m docsearch.presentation.cli search <query>")
            sys.exit(1)
        cmd_search(query)
    else:
        print(f"Unknown command: {command}")
        sys.exit(1)


if __name__ == "__main__":
    main()
