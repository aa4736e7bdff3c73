"""Protocol interfaces for dependency injection."""
from .backend import SearchBackendProtocol
from .listener import SearchListener
from .normalizer import NormalizerProtocol
from .scheduler import SchedulerProtocol, TimerHandle
from .vectorizer import VectorizerProtocol

__all__ = [
    "SearchBackendProtocol",
    "SearchListener",
    "NormalizerProtocol",
    "SchedulerProtocol",
    "TimerHandle",
    "VectorizerProtocol",
]
