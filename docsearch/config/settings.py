from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):

    vector_dimensions: int = 128

    # Ranking
    vector_weight: float = 1.0
    lexical_weight: float = 0.0
    score_ratio: float = 0.0
    snippet_window: int = 200

    # Orchestration
    debounce_ms: int = 300
    history_limit: int = 10

    # Optional remote backend; the local index is used when unset
    remote_search_url: Optional[str] = None
    remote_timeout_seconds: float = 10.0

    docs_path: str = "./docs"
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_prefix = "DOCSEARCH_"
        extra = "ignore"


settings = Settings()
