"""Stream transports and timer schedulers used by StreamClient.

The client only depends on the two small interfaces defined here, so tests
can drive it with in-memory fakes instead of sockets and real timers.
"""

import threading
from abc import ABC, abstractmethod
from typing import Callable, Iterable, Iterator, Optional, Tuple

import requests

from ..logging_config import get_logger

logger = get_logger(__name__)

OpenCallback = Callable[[], None]
EventCallback = Callable[[str, str], None]
LostCallback = Callable[[Optional[BaseException]], None]

DEFAULT_EVENT = "message"


class StreamHandle(ABC):
    """An opened stream. Closing it must be safe at any time and idempotent."""

    @abstractmethod
    def close(self) -> None:
        pass


class Transport(ABC):
    """Opens persistent inbound event streams."""

    @abstractmethod
    def open(
        self,
        url: str,
        on_open: OpenCallback,
        on_event: EventCallback,
        on_lost: LostCallback,
    ) -> StreamHandle:
        """
        Start opening a stream and return immediately.

        ``on_open`` fires once the stream is established, ``on_event`` with
        ``(event_name, raw_data)`` per inbound event and ``on_lost`` once
        when the stream fails or ends. None of them fire after ``close()``.
        """
        pass


class TimerHandle(ABC):
    @abstractmethod
    def cancel(self) -> None:
        pass


class Scheduler(ABC):
    """Runs a callback once after a delay."""

    @abstractmethod
    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        pass


def iter_sse_events(lines: Iterable[str]) -> Iterator[Tuple[str, str]]:
    """
    Parse Server-Sent Events lines into ``(event_name, data)`` pairs.

    Multi-line data is joined with newlines. Comment lines and the ``id``
    and ``retry`` fields are skipped. An event without data is not emitted.
    """
    event_name = DEFAULT_EVENT
    data_lines = []

    for raw in lines:
        line = raw.rstrip("\r")

        if not line:
            if data_lines:
                yield event_name, "\n".join(data_lines)
            event_name = DEFAULT_EVENT
            data_lines = []
            continue

        if line.startswith(":"):
            continue

        field, _, value = line.partition(":")
        if value.startswith(" "):
            value = value[1:]

        if field == "event":
            event_name = value or DEFAULT_EVENT
        elif field == "data":
            data_lines.append(value)

    if data_lines:
        yield event_name, "\n".join(data_lines)


class SSEStream(StreamHandle):
    """One streaming HTTP request read on a daemon thread."""

    def __init__(
        self,
        session: requests.Session,
        url: str,
        on_open: OpenCallback,
        on_event: EventCallback,
        on_lost: LostCallback,
        timeout: Optional[float] = None,
    ):
        self.url = url
        self._session = session
        self._on_open = on_open
        self._on_event = on_event
        self._on_lost = on_lost
        self._timeout = timeout
        self._closed = threading.Event()
        self._response: Optional[requests.Response] = None
        self._thread = threading.Thread(
            target=self._run, name=f"sse-stream {url}", daemon=True
        )

    def start(self) -> None:
        self._thread.start()

    def close(self) -> None:
        self._closed.set()
        response = self._response
        if response is not None:
            response.close()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def _run(self) -> None:
        error: Optional[BaseException] = None
        try:
            with self._session.get(
                self.url,
                stream=True,
                headers={"Accept": "text/event-stream", "Cache-Control": "no-cache"},
                timeout=self._timeout,
            ) as response:
                response.raise_for_status()
                self._response = response
                if self.closed:
                    return

                logger.debug(f"Stream opened: {self.url}")
                self._on_open()

                lines = response.iter_lines(decode_unicode=True)
                for event_name, data in iter_sse_events(lines):
                    if self.closed:
                        return
                    self._on_event(event_name, data)

        # Closing the response from another thread surfaces as an arbitrary
        # error in the reader; only report it when the stream was not closed
        except Exception as e:
            error = e

        if self.closed:
            return

        if error is not None:
            logger.warning(f"Stream lost: {self.url}: {error}")
        else:
            logger.warning(f"Stream ended by server: {self.url}")
        self._on_lost(error)


class SSETransport(Transport):
    """Server-Sent Events over a streaming ``requests`` response."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        self.session = session or requests.Session()
        self.timeout = timeout

    def open(
        self,
        url: str,
        on_open: OpenCallback,
        on_event: EventCallback,
        on_lost: LostCallback,
    ) -> SSEStream:
        stream = SSEStream(self.session, url, on_open, on_event, on_lost, self.timeout)
        stream.start()
        return stream


class _ThreadingTimer(TimerHandle):
    def __init__(self, timer: threading.Timer):
        self._timer = timer

    def cancel(self) -> None:
        self._timer.cancel()


class ThreadingScheduler(Scheduler):
    """Scheduler backed by daemon ``threading.Timer`` threads."""

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        timer = threading.Timer(delay_ms / 1000.0, callback)
        timer.daemon = True
        timer.start()
        return _ThreadingTimer(timer)
