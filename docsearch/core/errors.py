"""Domain errors."""


class DocSearchError(Exception):
    """Base exception for docsearch errors."""

    message = "An unexpected error occurred"

    def __init__(self, message: str | None = None, **details):
        super().__init__(message or self.message)
        self.message = message or self.message
        self.details = details


class IngestionParseFailure(DocSearchError):
    """Markup could not be parsed. Recovered by the normalizer."""

    message = "Failed to parse document markup"


class DimensionalityMismatchError(DocSearchError):
    """Two vectors, or a vector and an index, disagree on length."""

    message = "Vector dimensionality mismatch"

    def __init__(self, expected: int, actual: int):
        super().__init__(
            f"Vector dimensionality mismatch: expected {expected}, got {actual}",
            expected=expected,
            actual=actual,
        )
        self.expected = expected
        self.actual = actual


class QueryExecutionError(DocSearchError):
    """Search backend failed to answer a query."""

    message = "Search failed"

    def __init__(self, message: str | None = None, query: str | None = None):
        super().__init__(message, query=query)
        self.query = query
