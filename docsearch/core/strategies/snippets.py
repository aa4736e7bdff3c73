"""Snippet extraction - densest query window of a document."""

import logging

logger = logging.getLogger(__name__)

TRUNCATION_MARKER = "..."


def best_snippet(text: str, query: str, window_size: int = 200) -> str:
    """Find the word window with the most query-term matches.

    Matching is case-insensitive on whitespace tokens. The first window with
    the highest count wins.

    Args:
        text: Document text.
        query: Query text.
        window_size: Window length in words.

    Returns:
        The window joined by single spaces, with a trailing marker when it
        stops before the end of the text. Texts no longer than the window are
        returned unchanged.
    """
    if window_size < 1:
        raise ValueError(f"window_size must be positive, got {window_size}")

    words = text.split()
    if len(words) <= window_size:
        return text

    terms = {w.lower() for w in query.split()}
    hits = [1 if w.lower() in terms else 0 for w in words]

    score = sum(hits[:window_size])
    best_score, best_start = score, 0
    for start in range(1, len(words) - window_size + 1):
        score += hits[start + window_size - 1] - hits[start - 1]
        if score > best_score:
            best_score, best_start = score, start

    logger.debug(f"Snippet window at word {best_start} with {best_score} matches")

    snippet = " ".join(words[best_start : best_start + window_size])
    if best_start + window_size < len(words):
        snippet += TRUNCATION_MARKER
    return snippet
