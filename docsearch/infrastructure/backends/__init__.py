"""Search backend implementations."""
from .http_backend import HttpSearchBackend
from .local_backend import LocalSearchBackend

__all__ = ["HttpSearchBackend", "LocalSearchBackend"]
