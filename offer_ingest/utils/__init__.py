"""
Utility functions and configurations for the offer ingestion pipeline.
"""

from .config import (
    OFFERS_COLLECTION,
    REDIS_DB,
    REDIS_HOST,
    REDIS_PORT,
    SERP_API_KEY,
    STORAGE_BATCH_LIMIT,
)
from .exceptions import ConfigurationError, SerpAPIException, StorageError
from .logging import logger

__all__ = [
    "OFFERS_COLLECTION",
    "REDIS_HOST",
    "REDIS_PORT",
    "REDIS_DB",
    "SERP_API_KEY",
    "STORAGE_BATCH_LIMIT",
    "logger",
    "ConfigurationError",
    "SerpAPIException",
    "StorageError",
]
