from datetime import datetime
import logging

import pytest

from offer_ingest.tests.factories import COLLECTED_AT, InMemoryDocumentStore

# Configure logger for tests
logger = logging.getLogger(__name__)
logging.basicConfig(level=logging.INFO)


@pytest.fixture
def memory_store() -> InMemoryDocumentStore:
    """Provides an empty in-memory document store."""
    return InMemoryDocumentStore()


@pytest.fixture
def collected_at() -> datetime:
    return COLLECTED_AT
