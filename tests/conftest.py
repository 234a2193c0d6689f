"""Shared fixtures for siren-cache tests."""

import pytest
from samples import ORDER_DOCUMENT, ORDER_HREF, EventRecorder, FakeTransport

from siren_cache.services import EntityStore


@pytest.fixture
def transport():
    """Fake transport with the sample order registered."""
    fake = FakeTransport()
    fake.add(ORDER_HREF, ORDER_DOCUMENT)
    return fake


@pytest.fixture
def store(transport):
    """Entity store backed by the fake transport."""
    return EntityStore(transport=transport, coalesce_requests=True)


@pytest.fixture
def recorder(store):
    """Event recorder attached to the store."""
    return EventRecorder(store)
