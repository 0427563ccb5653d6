"""
Shared pytest fixtures for ReliefLink tests.

- **resources**: the seeded Chennai resource list
- **resolver**: LocationResolver with jitter off (exact coordinates)
- **storage**: fresh InMemoryStorage per test
- **StubExtractor**: canned ExtractionResult per message, no model calls
- **client**: TestClient with storage and pipeline overridden
"""
from typing import Dict, Generator, List, Optional

import pytest
from fastapi.testclient import TestClient

from relieflink.api.triage import get_pipeline
from relieflink.core.pipeline import TriagePipeline
from relieflink.db.storage import SEED_RESOURCES, InMemoryStorage, get_storage
from relieflink.main import app
from relieflink.schemas.triage import ExtractionResult, Resource
from relieflink.services.extraction import FALLBACK_EXTRACTION
from relieflink.services.maps import LocationResolver


class StubExtractor:
    """Returns the canned result for known messages and the fallback otherwise."""

    def __init__(self, canned: Optional[Dict[str, ExtractionResult]] = None):
        self.canned = canned or {}
        self.calls: List[str] = []

    def extract(self, message: str) -> ExtractionResult:
        self.calls.append(message)
        return self.canned.get(message, FALLBACK_EXTRACTION)


def make_extraction(need: str, location: str, level: str = "medium", quantity: Optional[str] = None) -> ExtractionResult:
    return ExtractionResult(
        need=need,
        quantity=quantity,
        location=location,
        urgency_level=level,
        urgency_reason=f"{level} urgency for {need.lower()}",
    )


@pytest.fixture
def resources() -> List[Resource]:
    return [Resource.model_validate(r) for r in SEED_RESOURCES]


@pytest.fixture
def resolver() -> LocationResolver:
    return LocationResolver(jitter=False)


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def stub_extractor() -> StubExtractor:
    return StubExtractor()


@pytest.fixture
def pipeline(stub_extractor: StubExtractor, resolver: LocationResolver, storage: InMemoryStorage) -> TriagePipeline:
    return TriagePipeline(extractor=stub_extractor, resolver=resolver, storage=storage)


@pytest.fixture
def client(pipeline: TriagePipeline, storage: InMemoryStorage) -> Generator[TestClient, None, None]:
    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_pipeline] = lambda: pipeline
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
