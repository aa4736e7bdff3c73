"""In-memory hybrid document search."""
