"""
Python client for the event stream.

StreamClient subscribes to the stream a generated emission module publishes
to. Reconnection follows the state machine in ``machine.py``; the client
only carries out the actions a transition asks for.

Dispatch order for one inbound event: every callback registered for the
event name, in registration order, then every wildcard callback, in
registration order. Both lists are snapshotted before the first callback
runs, so subscribing or unsubscribing from inside a callback only affects
later events. Once the stream that delivered an event is closed (by
``disconnect()`` or a reconnect), no further callbacks run for it. Callbacks
run while holding the client lock, so a ``disconnect()`` from another thread
waits for the running callback and none start after it returns.
"""

import json
import os
import threading
from functools import partial
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from ..codegen.core.loader import SchemaSource
from ..codegen.core.resolver import resolve_schema
from ..codegen.core.schema import ResolvedSchema
from ..logging_config import get_logger
from .machine import (
    IDLE,
    Action,
    ConnectionState,
    ConnectionStatus,
    ReconnectPolicy,
    Signal,
    Transition,
    transition,
)
from .transport import (
    Scheduler,
    SSETransport,
    StreamHandle,
    ThreadingScheduler,
    TimerHandle,
    Transport,
)

logger = get_logger(__name__)

EventHandler = Callable[[Any], None]
WildcardHandler = Callable[[str, Any], None]

STREAM_URL_ENV = "EVENT_STREAM_URL"


def join_url(base_url: str, endpoint: str) -> str:
    """Join a server base URL and an endpoint path."""
    return base_url.rstrip("/") + "/" + endpoint.lstrip("/")


class StreamClient:
    """
    Reconnecting event stream client.

    Args:
        url: Full stream URL
        transport: Stream transport (defaults to SSETransport)
        scheduler: Timer scheduler (defaults to ThreadingScheduler)
        policy: Backoff policy
        event_names: Known event names. When given, other events are
            dropped and subscribing to an unknown name raises ValueError.
    """

    def __init__(
        self,
        url: str,
        transport: Optional[Transport] = None,
        scheduler: Optional[Scheduler] = None,
        policy: Optional[ReconnectPolicy] = None,
        event_names: Optional[Iterable[str]] = None,
    ):
        self.url = url
        self.transport = transport or SSETransport()
        self.scheduler = scheduler or ThreadingScheduler()
        self.policy = policy or ReconnectPolicy()
        self.event_names = frozenset(event_names) if event_names is not None else None

        self._lock = threading.RLock()
        self._status: ConnectionStatus = IDLE
        self._stream: Optional[StreamHandle] = None
        self._stream_token = 0
        self._timer: Optional[TimerHandle] = None
        self._timer_token = 0
        self._listeners: Dict[str, List[EventHandler]] = {}
        self._wildcard: List[WildcardHandler] = []

    @classmethod
    def for_schema(
        cls, schema: Union[SchemaSource, ResolvedSchema], base_url: str, **kwargs
    ) -> "StreamClient":
        """Client for a schema's endpoint that only accepts the schema's events."""
        if not isinstance(schema, ResolvedSchema):
            schema = resolve_schema(schema)
        return cls(join_url(base_url, schema.endpoint), event_names=schema.event_names, **kwargs)

    @property
    def status(self) -> ConnectionStatus:
        return self._status

    @property
    def is_connected(self) -> bool:
        return self._status.is_connected

    def connect(self) -> None:
        """Open the stream. Does nothing while connected or reconnecting."""
        with self._lock:
            if self._stream is not None:
                return
            self._send(Signal.CONNECT)

    def disconnect(self) -> None:
        """Cancel any pending retry and close the stream. Safe to call repeatedly."""
        self._send(Signal.DISCONNECT)

    def on(self, event_name: str, callback: EventHandler) -> Callable[[], None]:
        """Subscribe to one event. Returns a callable that unsubscribes."""
        if self.event_names is not None and event_name not in self.event_names:
            raise ValueError(f"Unknown event: {event_name!r}")

        with self._lock:
            current = self._listeners.get(event_name, [])
            self._listeners[event_name] = current + [callback]

        return partial(self.off, event_name, callback)

    def off(self, event_name: str, callback: EventHandler) -> None:
        """Remove one registration of a callback."""
        with self._lock:
            current = self._listeners.get(event_name)
            if not current or callback not in current:
                return
            index = current.index(callback)
            self._listeners[event_name] = current[:index] + current[index + 1:]

    def on_all(self, callback: WildcardHandler) -> Callable[[], None]:
        """Subscribe to every event; the callback gets ``(event_name, data)``."""
        with self._lock:
            self._wildcard = self._wildcard + [callback]

        def unsubscribe():
            with self._lock:
                if callback in self._wildcard:
                    index = self._wildcard.index(callback)
                    self._wildcard = self._wildcard[:index] + self._wildcard[index + 1:]

        return unsubscribe

    # State machine plumbing

    def _send(self, signal: Signal, stream_token: Optional[int] = None) -> None:
        with self._lock:
            if stream_token is not None and stream_token != self._stream_token:
                logger.debug(f"Ignoring {signal.value} from a closed stream")
                return

            result = transition(self._status, signal, self.policy)
            if result.status != self._status:
                logger.debug(
                    f"{self._status.state.value} -> {result.status.state.value} on {signal.value}"
                )
            self._status = result.status

            for action in result.actions:
                self._perform(action, result)

    def _perform(self, action: Action, result: Transition) -> None:
        if action == Action.OPEN_STREAM:
            self._open_stream()
        elif action == Action.CLOSE_STREAM:
            self._close_stream()
        elif action == Action.SCHEDULE_RETRY:
            self._schedule_retry(result.delay_ms)
        elif action == Action.CANCEL_RETRY:
            self._cancel_retry()
        elif action == Action.GIVE_UP:
            logger.error(
                f"Giving up on {self.url} after {self.policy.max_attempts} reconnect attempt(s)"
            )

    def _open_stream(self) -> None:
        self._close_stream()
        token = self._stream_token

        logger.info(f"Connecting to {self.url}")
        try:
            self._stream = self.transport.open(
                self.url,
                on_open=partial(self._handle_open, token),
                on_event=partial(self._handle_event, token),
                on_lost=partial(self._handle_lost, token),
            )
        except Exception as e:
            logger.error(f"Failed to open stream {self.url}: {e}")
            self._send(Signal.STREAM_LOST)

    def _close_stream(self) -> None:
        # Invalidates callbacks from the stream being closed
        self._stream_token += 1
        stream, self._stream = self._stream, None
        if stream is not None:
            stream.close()

    def _schedule_retry(self, delay_ms: int) -> None:
        self._cancel_retry()
        token = self._timer_token
        logger.info(
            f"Reconnecting in {delay_ms}ms "
            f"(attempt {self._status.attempt}/{self.policy.max_attempts})"
        )
        self._timer = self.scheduler.schedule(delay_ms, partial(self._handle_retry_due, token))

    def _cancel_retry(self) -> None:
        self._timer_token += 1
        timer, self._timer = self._timer, None
        if timer is not None:
            timer.cancel()

    # Transport and timer callbacks

    def _handle_open(self, token: int) -> None:
        self._send(Signal.OPENED, token)
        if token == self._stream_token:
            logger.info(f"Connected to {self.url}")

    def _handle_lost(self, token: int, error: Optional[BaseException] = None) -> None:
        self._send(Signal.STREAM_LOST, token)

    def _handle_retry_due(self, token: int) -> None:
        with self._lock:
            if token != self._timer_token:
                return
            self._timer = None
            self._send(Signal.RETRY_DUE)

    def _is_live(self, token: int) -> bool:
        with self._lock:
            return token == self._stream_token and self._status.state != ConnectionState.DISCONNECTED

    def _handle_event(self, token: int, event_name: str, raw_data: str) -> None:
        if self.event_names is not None and event_name not in self.event_names:
            logger.debug(f"Dropping unknown event {event_name!r}")
            return

        try:
            data = json.loads(raw_data)
        except json.JSONDecodeError as e:
            logger.error(f"Error parsing {event_name} event: {e}")
            return

        with self._lock:
            if not self._is_live(token):
                return
            specific = self._listeners.get(event_name, [])
            wildcard = self._wildcard

        self._dispatch(token, event_name, data, specific, wildcard)

    def _dispatch(
        self,
        token: int,
        event_name: str,
        data: Any,
        specific: List[EventHandler],
        wildcard: List[WildcardHandler],
    ) -> None:
        # Listener lists are replaced on change, never mutated
        for callback in specific:
            with self._lock:
                if not self._is_live(token):
                    return
                try:
                    callback(data)
                except Exception:
                    logger.exception(f"Error in {event_name} listener")

        for callback in wildcard:
            with self._lock:
                if not self._is_live(token):
                    return
                try:
                    callback(event_name, data)
                except Exception:
                    logger.exception("Error in wildcard listener")


def create_client(url: str, **kwargs) -> StreamClient:
    """Create an independent client owned by the caller."""
    return StreamClient(url, **kwargs)


_default_client: Optional[StreamClient] = None
_default_lock = threading.Lock()


def get_default_client(url: Optional[str] = None) -> StreamClient:
    """
    Return the shared client, creating it on first use.

    The URL is only used when the client is created; it falls back to the
    ``EVENT_STREAM_URL`` environment variable.

    Raises:
        ValueError: If no client exists yet and no URL is available
    """
    global _default_client
    with _default_lock:
        if _default_client is None:
            url = url or os.environ.get(STREAM_URL_ENV)
            if not url:
                raise ValueError(
                    f"No stream URL given and {STREAM_URL_ENV} is not set"
                )
            _default_client = create_client(url)
        return _default_client


def dispose_default_client() -> None:
    """Disconnect and drop the shared client; the next use creates a new one."""
    global _default_client
    with _default_lock:
        client, _default_client = _default_client, None
    if client is not None:
        client.disconnect()


def connect(url: Optional[str] = None) -> StreamClient:
    client = get_default_client(url)
    client.connect()
    return client


def disconnect() -> None:
    with _default_lock:
        client = _default_client
    if client is not None:
        client.disconnect()


def on_event(event_name: str, callback: EventHandler) -> Callable[[], None]:
    return get_default_client().on(event_name, callback)


def on_all_events(callback: WildcardHandler) -> Callable[[], None]:
    return get_default_client().on_all(callback)
