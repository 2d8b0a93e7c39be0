"""Configuration management for environment variables and application settings."""

import os
from typing import List

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _read_env(var_name: str, default: str) -> str:
    """Read a variable, dropping an inline `# comment` and surrounding whitespace."""
    return os.getenv(var_name, default).split("#", 1)[0].strip()


def get_env_int(var_name: str, default: str) -> int:
    return int(_read_env(var_name, default))


def get_env_bool(var_name: str, default: str) -> bool:
    return _read_env(var_name, default).lower() == "true"


def get_env_list(var_name: str, default: str) -> List[str]:
    """Split a comma separated variable, skipping blank entries."""
    return [part.strip() for part in _read_env(var_name, default).split(",") if part.strip()]


# Core configurations
DEBUG = get_env_bool("DEBUG", "False")
LOG_DIR = os.getenv("LOG_DIR", "logs")

# SerpAPI (Google Shopping engine)
SERP_API_KEY = os.getenv("SERP_API_KEY")
SERP_API_URL = os.getenv("SERP_API_URL", "https://serpapi.com/search.json")
SERP_ENGINE = os.getenv("SERP_ENGINE", "google_shopping")
SERP_COUNTRY = os.getenv("SERP_COUNTRY", "ca")
SERP_LANGUAGE = os.getenv("SERP_LANGUAGE", "en")
SERP_PAGE_SIZE = get_env_int("SERP_PAGE_SIZE", "100")
SERP_PAGE_OFFSETS = [int(offset) for offset in get_env_list("SERP_PAGE_OFFSETS", "0,100")]
SERP_TIMEOUT = get_env_int("SERP_TIMEOUT", "60")  # Seconds per page request

# Offer normalization
OFFER_CURRENCY = os.getenv("OFFER_CURRENCY", "CAD")
OFFER_SOURCE = os.getenv("OFFER_SOURCE", "google_shopping")

# Redis Configuration
REDIS_HOST = os.getenv("REDIS_HOST", "localhost")
REDIS_PORT = get_env_int("REDIS_PORT", "6379")
REDIS_DB = get_env_int("REDIS_DB", "0")

# Collection replacement
OFFERS_COLLECTION = os.getenv("OFFERS_COLLECTION", "offers")
STORAGE_BATCH_LIMIT = get_env_int("STORAGE_BATCH_LIMIT", "400")  # Max documents per commit

# Ingestion runs
INGEST_QUERIES = get_env_list("INGEST_QUERIES", "golf")
RUN_TIMEOUT_SECONDS = get_env_int("RUN_TIMEOUT_SECONDS", "300")
SCHEDULE_ENABLED = get_env_bool("SCHEDULE_ENABLED", "False")
SCHEDULE_INTERVAL_MINUTES = get_env_int("SCHEDULE_INTERVAL_MINUTES", "1440")  # Daily by default

# Optional: Print config only in debug mode for verification
if DEBUG:
    print(f"✅ Redis Config: {REDIS_HOST}:{REDIS_PORT}, DB={REDIS_DB}, batch limit={STORAGE_BATCH_LIMIT}")
