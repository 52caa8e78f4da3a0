"""Application configuration.

Settings are read from environment variables (a local .env file is loaded by
the API entry point before this module is used). Missing values fall back to
defaults suitable for local development against a MongoDB Atlas cluster
named "Atma-Contents" and an embedding service on port 5000.

Environment variables:
- EMBEDDING_SERVICE_URL: base URL of the embedding service (POST /embed)
- EMBEDDING_TIMEOUT_SECONDS: transport timeout for the embedding call
- VECTOR_STORE_BACKEND: 'mongodb' (default) or 'qdrant'
- MONGODB_CONNECTION_STRING, MONGODB_DATABASE, MONGODB_COLLECTION
- VECTOR_INDEX_NAME, VECTOR_PATH: Atlas Vector Search index and vector field
- QDRANT_HOST, QDRANT_PORT, QDRANT_API_KEY, QDRANT_COLLECTION
- NUM_CANDIDATES_FACTOR, NUM_CANDIDATES_CEILING: candidate pool sizing
- LOG_LEVEL
"""
from __future__ import annotations

import os
from typing import Literal, Optional

from pydantic import BaseModel, Field


class Settings(BaseModel):
    """Configuration settings loaded from environment."""
    embedding_service_url: str = Field(
        default="http://localhost:5000", description="Embedding service base URL."
    )
    embedding_timeout_seconds: float = Field(
        default=30.0, gt=0, description="Transport timeout for embedding requests."
    )
    vector_store_backend: Literal["mongodb", "qdrant"] = Field(
        default="mongodb", description="Document store used for vector search."
    )

    mongodb_connection_string: str = Field(default="mongodb://localhost:27017")
    mongodb_database: str = Field(default="Atma-Contents")
    mongodb_collection: str = Field(default="meditations")
    vector_index_name: str = Field(
        default="meditations_vector_search", description="Atlas Vector Search index name."
    )
    vector_path: str = Field(
        default="embedding", description="Document field holding the stored vector."
    )

    qdrant_host: str = Field(default="localhost")
    qdrant_port: int = Field(default=6333)
    qdrant_api_key: Optional[str] = Field(default=None)
    qdrant_collection: str = Field(default="meditations")

    num_candidates_factor: int = Field(default=20, ge=1)
    num_candidates_ceiling: int = Field(default=100, ge=1)

    log_level: str = Field(default="INFO")


def load_settings() -> Settings:
    """Build settings from the current environment.

    Raises:
        ValidationError: If a numeric environment value is out of range.
    """
    backend = os.getenv("VECTOR_STORE_BACKEND", "mongodb").strip().lower()
    if backend not in {"mongodb", "qdrant"}:
        backend = "mongodb"

    return Settings(
        embedding_service_url=os.getenv("EMBEDDING_SERVICE_URL", "http://localhost:5000").rstrip("/"),
        embedding_timeout_seconds=float(os.getenv("EMBEDDING_TIMEOUT_SECONDS", "30")),
        vector_store_backend=backend,  # type: ignore[arg-type]
        mongodb_connection_string=os.getenv("MONGODB_CONNECTION_STRING", "mongodb://localhost:27017"),
        mongodb_database=os.getenv("MONGODB_DATABASE", "Atma-Contents"),
        mongodb_collection=os.getenv("MONGODB_COLLECTION", "meditations"),
        vector_index_name=os.getenv("VECTOR_INDEX_NAME", "meditations_vector_search"),
        vector_path=os.getenv("VECTOR_PATH", "embedding"),
        qdrant_host=os.getenv("QDRANT_HOST", "localhost"),
        qdrant_port=int(os.getenv("QDRANT_PORT", "6333")),
        qdrant_api_key=os.getenv("QDRANT_API_KEY") or None,
        qdrant_collection=os.getenv("QDRANT_COLLECTION", "meditations"),
        num_candidates_factor=int(os.getenv("NUM_CANDIDATES_FACTOR", "20")),
        num_candidates_ceiling=int(os.getenv("NUM_CANDIDATES_CEILING", "100")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get cached application settings."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def reset_settings_cache() -> None:
    """Drop cached settings so environment changes apply on the next call."""
    global _settings
    _settings = None
