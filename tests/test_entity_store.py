"""
Tests for the entity cache store.
"""

import asyncio

import pytest

from siren_cache.entities import Action, Entity, Field
from siren_cache.exceptions import ErrorKind, TransportError
from siren_cache.parser import parse_entity
from siren_cache.services import EntityStore

from samples import CUSTOMER_HREF, ITEMS_HREF, ORDER_DOCUMENT, ORDER_HREF, EventRecorder

LATEST_HREF = "http://api.x.io/orders/latest"


# Reads and caching


@pytest.mark.asyncio
async def test_repeated_get_issues_one_request(store, transport):
    """Test a second cached get is served without network access."""
    first = await store.get_result(ORDER_HREF)
    second = await store.get_result(ORDER_HREF)

    assert len(transport.requests) == 1
    assert first.from_cache is False
    assert second.from_cache is True
    assert second.entity is first.entity
    assert isinstance(first.entity, Entity)


@pytest.mark.asyncio
async def test_get_synthesizes_plain_get_request(store, transport):
    await store.get(ORDER_HREF)

    request = transport.requests[0]
    assert request.method == "GET"
    assert request.url == ORDER_HREF
    assert request.body is None
    assert request.headers == {}


@pytest.mark.asyncio
async def test_entity_is_cached_under_requested_and_self_href(store, transport):
    """Test an aliased address stores the entity under both keys."""
    transport.add(LATEST_HREF, ORDER_DOCUMENT)

    entity = await store.get(LATEST_HREF)
    cache = store.get_cache()

    assert entity.self_href == ORDER_HREF
    assert cache[LATEST_HREF] == entity
    assert cache[ORDER_HREF] == entity

    await store.get(ORDER_HREF)
    assert len(transport.requests) == 1


@pytest.mark.asyncio
async def test_embedded_sub_entities_are_promoted(store, transport):
    """Test a sub-entity with a self link becomes a cache hit."""
    await store.get(ORDER_HREF)

    result = await store.get_result(CUSTOMER_HREF)

    assert result.from_cache is True
    assert len(transport.requests) == 1
    assert result.entity == parse_entity(ORDER_DOCUMENT["entities"][1])
    assert result.entity.properties["customerId"] == "pj123"


@pytest.mark.asyncio
async def test_embedded_links_are_not_promoted(store, transport):
    await store.get(ORDER_HREF)

    assert ITEMS_HREF not in store.get_cache()
    assert set(store.get_cache()) == {ORDER_HREF, CUSTOMER_HREF}


@pytest.mark.asyncio
async def test_get_without_cache_always_fetches_and_never_writes(store, transport):
    """Test use_cache=False bypasses the namespace in both directions."""
    await store.get(ORDER_HREF)
    store.get_cache()[ORDER_HREF] = parse_entity({"title": "stale"})

    entity = await store.get(ORDER_HREF, use_cache=False)

    assert len(transport.requests) == 2
    assert entity.properties["orderNumber"] == 42
    assert store.get_cache()[ORDER_HREF].title == "stale"


@pytest.mark.asyncio
async def test_uncached_get_emits_no_update(store, transport, recorder):
    await store.get(ORDER_HREF, use_cache=False)

    assert recorder.names == ["inflight", "inflight"]
    assert store.stats()["entries"] == 0


@pytest.mark.asyncio
async def test_successful_get_emits_update_for_self_href(store, recorder):
    entity = await store.get(ORDER_HREF)

    assert recorder.names == ["inflight", "update", "inflight"]
    update = recorder.of("update")[0]
    assert update.href == ORDER_HREF
    assert update.entity is entity


@pytest.mark.asyncio
async def test_entity_without_self_link_is_cached_only_by_requested_href(store, transport, recorder):
    transport.add("http://api.x.io/anon", {"class": ["thing"]})

    await store.get("http://api.x.io/anon")

    assert list(store.get_cache()) == ["http://api.x.io/anon"]
    assert recorder.of("update") == []


# Failures


@pytest.mark.asyncio
async def test_http_error_emits_error_and_restores_inflight(store, transport, recorder):
    """Test a 500 yields inflight(1), error, inflight(0) and no entity."""
    transport.add(ORDER_HREF, status_code=500, reason="Internal Server Error", text="oops")

    result = await store.get_result(ORDER_HREF)

    assert result.entity is None
    assert result.ok is False
    assert recorder.names == ["inflight", "error", "inflight"]
    assert [e.count for e in recorder.of("inflight")] == [1, 0]
    error = recorder.of("error")[0]
    assert error.kind == ErrorKind.HTTP_STATUS
    assert "500" in error.message
    assert "Internal Server Error" in error.message
    assert result.error == error
    assert store.inflight == 0


@pytest.mark.asyncio
async def test_failed_get_does_not_mutate_cache(store, transport):
    """Test a failure is not cached, so the next get retries."""
    transport.add(ORDER_HREF, status_code=503, reason="Service Unavailable")

    assert await store.get(ORDER_HREF) is None
    assert store.get_cache() == {}

    transport.add(ORDER_HREF, ORDER_DOCUMENT)
    assert await store.get(ORDER_HREF) is not None
    assert len(transport.requests) == 2


@pytest.mark.asyncio
async def test_transport_failure_emits_transport_error(store, transport, recorder):
    transport.fail(ORDER_HREF, TransportError("Connection refused"))

    assert await store.get(ORDER_HREF) is None

    error = recorder.of("error")[0]
    assert error.kind == ErrorKind.TRANSPORT
    assert error.message == "Connection refused"
    assert store.inflight == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("body", ["<html>not json</html>", "[1, 2, 3]", '{"links": [{"href": "x"}]}'])
async def test_malformed_body_emits_parse_error(store, transport, recorder, body):
    """Test bodies that are not entity documents are reported and not cached."""
    transport.add(ORDER_HREF, text=body)

    assert await store.get(ORDER_HREF) is None

    assert recorder.of("error")[0].kind == ErrorKind.PARSE
    assert store.get_cache() == {}
    assert store.inflight == 0


@pytest.mark.asyncio
async def test_unexpected_exception_is_reported_as_unknown(store, transport, recorder):
    transport.fail(ORDER_HREF, RuntimeError("driver bug"))

    result = await store.get_result(ORDER_HREF)

    assert result.error.kind == ErrorKind.UNKNOWN
    assert result.error.message == "driver bug"
    assert store.inflight == 0


@pytest.mark.asyncio
async def test_failing_listener_does_not_break_fetch(store):
    def broken(event):
        raise RuntimeError("listener bug")

    store.subscribe("inflight", broken)
    store.subscribe("update", broken)

    entity = await store.get(ORDER_HREF)

    assert entity is not None
    assert store.inflight == 0


# Actions


@pytest.mark.asyncio
async def test_submit_action_caches_result_by_self_href(store, transport, recorder):
    """Test a POST result with a self link is cached and announced."""
    transport.add(ITEMS_HREF, ORDER_DOCUMENT)
    order = parse_entity(ORDER_DOCUMENT)
    action = order.action("add-item")

    entity = await store.submit_action(action, token="abc")

    request = transport.requests[0]
    assert request.method == "POST"
    assert request.headers["authorization"] == "Bearer abc"
    assert request.headers["content-type"] == "application/x-www-form-urlencoded"
    assert request.body == "orderNumber=42&productCode=&quantity="
    assert store.get_cache("abc") == {ORDER_HREF: entity}
    assert ITEMS_HREF not in store.get_cache("abc")
    assert recorder.names == ["inflight", "update", "inflight"]


@pytest.mark.asyncio
async def test_submit_action_without_cache(store, transport, recorder):
    transport.add(ITEMS_HREF, ORDER_DOCUMENT)
    action = Action(href=ITEMS_HREF, method="POST", fields=(Field(name="quantity", value=1),))

    entity = await store.submit_action(action, use_cache=False)

    assert entity is not None
    assert store.get_cache() == {}
    assert recorder.names == ["inflight", "inflight"]


@pytest.mark.asyncio
async def test_submit_action_failure_returns_none(store, transport, recorder):
    action = Action(href="http://api.x.io/nowhere", method="DELETE")

    assert await store.submit_action(action) is None
    assert "404" in recorder.of("error")[0].message
    assert [e.count for e in recorder.of("inflight")] == [1, 0]


# Namespaces


@pytest.mark.asyncio
async def test_credentials_have_separate_namespaces(store, transport):
    """Test credential B does not reuse credential A's cached entity."""
    await store.get(ORDER_HREF, token="A")
    await store.get(ORDER_HREF, token="B")

    assert len(transport.requests) == 2
    assert transport.requests[0].headers["authorization"] == "Bearer A"
    assert transport.requests[1].headers["authorization"] == "Bearer B"
    assert store.get_cache("A") is not store.get_cache("B")
    assert ORDER_HREF not in store.get_cache()


def test_get_cache_is_idempotent(store):
    assert store.get_cache("A") is store.get_cache("A")
    assert store.get_cache() is store.get_cache(None)


def test_clear_unknown_namespace_returns_false_without_events(store, recorder):
    assert store.clear("nobody") is False
    assert recorder.events == []


@pytest.mark.asyncio
async def test_clear_empties_namespace(store, transport, recorder):
    """Test a cleared namespace turns the next get into a miss."""
    await store.get(ORDER_HREF, token="A")
    await store.get(ORDER_HREF, token="B")
    emitted = len(recorder.events)

    assert store.clear("A") is True
    assert len(recorder.events) == emitted

    await store.get(ORDER_HREF, token="A")
    await store.get(ORDER_HREF, token="B")
    assert len(transport.requests) == 3


@pytest.mark.asyncio
async def test_evict_removes_only_one_key(store, transport):
    """Test evicting the requested href leaves the self href entry in place."""
    transport.add(LATEST_HREF, ORDER_DOCUMENT)
    await store.get(LATEST_HREF)

    assert store.evict(LATEST_HREF) is True
    assert store.evict(LATEST_HREF) is False
    assert store.evict(LATEST_HREF, token="other") is False
    assert ORDER_HREF in store.get_cache()

    await store.get(ORDER_HREF)
    assert len(transport.requests) == 1


# Concurrency


@pytest.mark.asyncio
async def test_concurrent_gets_share_one_request(store, transport, recorder):
    """Test concurrent cached gets of one href are coalesced."""
    transport.gate = asyncio.Event()

    tasks = [asyncio.ensure_future(store.get(ORDER_HREF)) for _ in range(3)]
    await asyncio.sleep(0)
    assert store.stats()["pending"] == 1
    transport.gate.set()
    first, second, third = await asyncio.gather(*tasks)

    assert len(transport.requests) == 1
    assert first is second is third
    assert [e.count for e in recorder.of("inflight")] == [1, 0]
    assert store.stats()["pending"] == 0


@pytest.mark.asyncio
async def test_concurrent_gets_without_coalescing(transport):
    store = EntityStore(transport=transport, coalesce_requests=False)
    recorder = EventRecorder(store)
    transport.gate = asyncio.Event()

    tasks = [asyncio.ensure_future(store.get(ORDER_HREF)) for _ in range(2)]
    await asyncio.sleep(0)
    assert store.inflight == 2
    transport.gate.set()
    await asyncio.gather(*tasks)

    assert len(transport.requests) == 2
    assert [e.count for e in recorder.of("inflight")] == [1, 2, 1, 0]
    assert store.inflight == 0


@pytest.mark.asyncio
async def test_concurrent_gets_for_different_credentials_are_not_coalesced(store, transport):
    transport.gate = asyncio.Event()

    tasks = [
        asyncio.ensure_future(store.get(ORDER_HREF, token="A")),
        asyncio.ensure_future(store.get(ORDER_HREF, token="B")),
    ]
    await asyncio.sleep(0)
    transport.gate.set()
    await asyncio.gather(*tasks)

    assert len(transport.requests) == 2


@pytest.mark.asyncio
async def test_get_after_clear_does_not_join_earlier_request(store, transport):
    """Test a get issued after clear starts a fresh request instead of reusing the old one."""
    transport.gate = asyncio.Event()

    first = asyncio.ensure_future(store.get(ORDER_HREF, token="A"))
    await asyncio.sleep(0)
    store.clear("A")
    second = asyncio.ensure_future(store.get(ORDER_HREF, token="A"))
    await asyncio.sleep(0)

    assert len(transport.requests) == 2
    assert store.stats()["pending"] == 1

    transport.gate.set()
    await asyncio.gather(first, second)

    assert store.stats()["pending"] == 0
    assert store.inflight == 0


@pytest.mark.asyncio
async def test_close_closes_transport(store, transport):
    await store.close()
    assert transport.closed is True


def test_stats(store):
    stats = store.stats()
    assert stats == {
        "namespaces": 0,
        "entries": 0,
        "inflight": 0,
        "pending": 0,
        "coalesce_requests": True,
    }
