"""Core business services."""
from .index_service import DocumentIndex
from .ranking_service import RankingEngine
from .search_service import SearchService
from .orchestrator import SearchOrchestrator
from .ingest_service import IngestService

__all__ = [
    "DocumentIndex",
    "RankingEngine",
    "SearchService",
    "SearchOrchestrator",
    "IngestService",
]
