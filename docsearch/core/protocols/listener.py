"""Display listener protocol."""
from typing import Protocol, runtime_checkable

from ..models.search import SearchResponse


@runtime_checkable
class SearchListener(Protocol):
    """Receives orchestrator updates for display."""

    def on_results(self, query: str, response: SearchResponse) -> None:
        ...

    def on_error(self, query: str, message: str) -> None:
        ...

    def on_clear(self) -> None:
        ...
