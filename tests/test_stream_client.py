import threading

import pytest

from event_codegen import stream
from event_codegen.stream import (
    ConnectionState,
    ConnectionStatus,
    ReconnectPolicy,
    StreamClient,
)
from event_codegen.stream.client import join_url

URL = "http://localhost:8080/events/stream"


@pytest.fixture
def client(transport, scheduler):
    return StreamClient(URL, transport=transport, scheduler=scheduler)


@pytest.fixture
def connected(client, transport):
    client.connect()
    transport.last.open()
    return client


def test_connect_opens_one_stream(client, transport):
    client.connect()
    client.connect()

    assert len(transport.streams) == 1
    assert transport.last.url == URL
    assert client.status == ConnectionStatus()
    assert not client.is_connected


def test_opened_stream_is_connected(connected):
    assert connected.is_connected
    assert connected.status.attempt == 0


def test_lost_stream_schedules_backoff(connected, transport, scheduler):
    first = transport.last
    first.lose()

    assert first.closed
    assert connected.status == ConnectionStatus(ConnectionState.RECONNECTING, 1)
    assert [t.delay_ms for t in scheduler.pending] == [3000]

    scheduler.fire()
    assert len(transport.streams) == 2

    transport.last.lose()
    assert scheduler.pending[-1].delay_ms == 6000
    assert connected.status.attempt == 2


def test_successful_reconnect_resets_attempts(connected, transport, scheduler):
    transport.last.lose()
    scheduler.fire()
    transport.last.open()

    assert connected.is_connected
    assert connected.status.attempt == 0

    transport.last.lose()
    assert scheduler.pending[-1].delay_ms == 3000


def test_gives_up_after_max_attempts(transport, scheduler):
    client = StreamClient(
        URL, transport=transport, scheduler=scheduler, policy=ReconnectPolicy(max_attempts=2)
    )
    client.connect()
    transport.last.lose()
    scheduler.fire()
    transport.last.lose()
    scheduler.fire()
    transport.last.lose()

    assert client.status.state == ConnectionState.DISCONNECTED
    assert len(transport.streams) == 3
    assert all(s.closed for s in transport.streams)
    assert len(scheduler.timers) == 2


def test_connect_after_giving_up(transport, scheduler):
    client = StreamClient(
        URL, transport=transport, scheduler=scheduler, policy=ReconnectPolicy(max_attempts=0)
    )
    client.connect()
    transport.last.lose()
    assert client.status.state == ConnectionState.DISCONNECTED

    client.connect()
    assert len(transport.streams) == 2


def test_disconnect_cancels_pending_retry(connected, transport, scheduler):
    transport.last.lose()
    timer = scheduler.pending[0]

    connected.disconnect()
    assert timer.cancelled
    assert connected.status.state == ConnectionState.DISCONNECTED

    # A timer that fires anyway must not reopen the stream
    scheduler.fire(timer)
    assert len(transport.streams) == 1
    assert connected.status.state == ConnectionState.DISCONNECTED


def test_disconnect_is_idempotent(connected, transport):
    connected.disconnect()
    connected.disconnect()
    assert transport.last.closed


def test_no_dispatch_after_disconnect(connected, transport):
    received = []
    connected.on("selection", received.append)
    stream_ = transport.last

    connected.disconnect()
    stream_.emit("selection", {"count": 1})
    stream_.lose()

    assert received == []
    assert connected.status.state == ConnectionState.DISCONNECTED


def test_callbacks_from_old_stream_are_ignored(connected, transport, scheduler):
    old = transport.last
    old.lose()
    scheduler.fire()

    old.open()
    assert not connected.is_connected

    received = []
    connected.on_all(lambda name, data: received.append(name))
    old.emit("selection", {})
    assert received == []


def test_dispatch_order(connected, transport):
    calls = []
    connected.on_all(lambda name, data: calls.append(("all", name)))
    connected.on("selection", lambda data: calls.append(("first", data["count"])))
    connected.on("selection", lambda data: calls.append(("second", data["count"])))
    connected.on("document", lambda data: calls.append(("document", None)))

    transport.last.emit("selection", {"count": 2})

    assert calls == [("first", 2), ("second", 2), ("all", "selection")]


def test_unsubscribe(connected, transport):
    received = []
    unsubscribe = connected.on("selection", received.append)
    unsubscribe_all = connected.on_all(lambda name, data: received.append(name))

    unsubscribe()
    unsubscribe_all()
    unsubscribe()
    transport.last.emit("selection", {"count": 1})

    assert received == []


def test_off_removes_one_registration(connected, transport):
    received = []
    connected.on("selection", received.append)
    connected.on("selection", received.append)
    connected.off("selection", received.append)

    transport.last.emit("selection", {"count": 1})
    assert received == [{"count": 1}]


def test_subscribing_during_dispatch_affects_next_event(connected, transport):
    calls = []

    def late(data):
        calls.append("late")

    def first(data):
        calls.append("first")
        connected.on("selection", late)

    connected.on("selection", first)
    transport.last.emit("selection", {})
    assert calls == ["first"]

    transport.last.emit("selection", {})
    assert calls == ["first", "first", "late"]


def test_unsubscribing_during_dispatch_affects_next_event(connected, transport):
    calls = []
    unsubscribe_second = None

    def first(data):
        calls.append("first")
        unsubscribe_second()

    connected.on("selection", first)
    unsubscribe_second = connected.on("selection", lambda data: calls.append("second"))

    transport.last.emit("selection", {})
    transport.last.emit("selection", {})
    assert calls == ["first", "second", "first"]


def test_disconnect_inside_callback_stops_dispatch(connected, transport):
    calls = []

    def first(data):
        calls.append("first")
        connected.disconnect()

    connected.on("selection", first)
    connected.on("selection", lambda data: calls.append("second"))
    connected.on_all(lambda name, data: calls.append("all"))

    transport.last.emit("selection", {})
    assert calls == ["first"]


def test_failing_callback_does_not_stop_others(connected, transport):
    received = []

    def broken(data):
        raise RuntimeError("boom")

    connected.on("selection", broken)
    connected.on("selection", received.append)
    transport.last.emit("selection", {"count": 3})

    assert received == [{"count": 3}]


def test_invalid_json_is_dropped(connected, transport):
    received = []
    connected.on_all(lambda name, data: received.append(data))

    transport.last.on_event("selection", "{not json")
    transport.last.emit("selection", {"count": 1})

    assert received == [{"count": 1}]
    assert connected.is_connected


def test_schema_client_filters_events(sample_schema, transport, scheduler):
    client = StreamClient.for_schema(
        sample_schema, "http://localhost:8080/", transport=transport, scheduler=scheduler
    )
    assert client.url == URL

    with pytest.raises(ValueError, match="Unknown event"):
        client.on("bogus", print)

    received = []
    client.on_all(lambda name, data: received.append(name))
    client.connect()
    transport.last.open()
    transport.last.emit("bogus", {})
    transport.last.emit("document", {"type": "opened", "documentName": "a.ai"})

    assert received == ["document"]


def test_failed_open_schedules_retry(transport, scheduler):
    transport.fail = True
    client = StreamClient(URL, transport=transport, scheduler=scheduler)

    client.connect()

    assert client.status == ConnectionStatus(ConnectionState.RECONNECTING, 1)
    assert scheduler.pending[0].delay_ms == 3000

    transport.fail = False
    scheduler.fire()
    transport.last.open()
    assert client.is_connected


def test_join_url():
    assert join_url("http://h:1/", "/events") == "http://h:1/events"
    assert join_url("http://h:1", "events") == "http://h:1/events"


def test_default_client_requires_url():
    with pytest.raises(ValueError, match="EVENT_STREAM_URL"):
        stream.get_default_client()


def test_default_client_is_shared(monkeypatch):
    monkeypatch.setenv("EVENT_STREAM_URL", URL)

    client = stream.get_default_client()
    assert stream.get_default_client() is client
    assert client.url == URL

    stream.dispose_default_client()
    assert stream.get_default_client() is not client


def test_module_level_helpers(monkeypatch, transport, scheduler):
    client = StreamClient(URL, transport=transport, scheduler=scheduler)
    monkeypatch.setattr(stream.client, "_default_client", client)

    received = []
    stream.on_event("selection", received.append)
    stream.on_all_events(lambda name, data: received.append(name))

    assert stream.connect() is client
    transport.last.open()
    transport.last.emit("selection", {"count": 1})
    stream.disconnect()

    assert received == [{"count": 1}, "selection"]
    assert client.status.state == ConnectionState.DISCONNECTED


def test_module_disconnect_without_client():
    stream.disconnect()


def test_disconnect_from_another_thread_waits_for_running_callback(connected, transport):
    events = []
    entered = threading.Event()
    release = threading.Event()

    def slow(data):
        events.append("slow")
        entered.set()
        release.wait(5)

    def disconnect():
        connected.disconnect()
        events.append("disconnected")

    connected.on("selection", slow)
    connected.on("selection", lambda data: events.append("second"))
    connected.on_all(lambda name, data: events.append("all"))

    reader = threading.Thread(target=transport.last.emit, args=("selection", {}))
    reader.start()
    assert entered.wait(5)

    closer = threading.Thread(target=disconnect)
    closer.start()
    closer.join(0.1)
    assert closer.is_alive()

    release.set()
    reader.join(5)
    closer.join(5)

    assert events[0] == "slow"
    assert events[-1] == "disconnected"
    assert connected.status.state == ConnectionState.DISCONNECTED
