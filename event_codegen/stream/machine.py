"""
Reconnect state machine for event stream clients.

The machine is a pure function from (status, signal) to a new status plus
the side effects the client must perform. It performs no I/O and owns no
timers, so every transition can be exercised directly. The generated
TypeScript client encodes the same table.

States::

    IDLE ──connect──▶ IDLE (opening) ──opened──▶ CONNECTED
    CONNECTED ──stream_lost──▶ RECONNECTING(1)
    RECONNECTING(n) ──retry_due──▶ RECONNECTING(n) (opening)
    RECONNECTING(n) ──stream_lost──▶ RECONNECTING(n+1) | DISCONNECTED (cap)
    any ──disconnect──▶ DISCONNECTED ──connect──▶ IDLE
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class ConnectionState(Enum):
    IDLE = "idle"
    CONNECTED = "connected"
    RECONNECTING = "reconnecting"
    DISCONNECTED = "disconnected"


class Signal(Enum):
    CONNECT = "connect"
    OPENED = "opened"
    STREAM_LOST = "stream_lost"
    RETRY_DUE = "retry_due"
    DISCONNECT = "disconnect"


class Action(Enum):
    OPEN_STREAM = "open_stream"
    CLOSE_STREAM = "close_stream"
    SCHEDULE_RETRY = "schedule_retry"
    CANCEL_RETRY = "cancel_retry"
    GIVE_UP = "give_up"


@dataclass(frozen=True)
class ReconnectPolicy:
    """Exponential backoff: base_delay_ms * 2^(attempt-1), at most max_attempts retries."""

    base_delay_ms: int = 3000
    max_attempts: int = 10

    def __post_init__(self):
        if self.base_delay_ms < 0:
            raise ValueError(f"base_delay_ms must be >= 0, got {self.base_delay_ms}")
        if self.max_attempts < 0:
            raise ValueError(f"max_attempts must be >= 0, got {self.max_attempts}")

    def delay_ms(self, attempt: int) -> int:
        """Delay before retry number ``attempt`` (1-based)."""
        if attempt < 1:
            raise ValueError(f"attempt must be >= 1, got {attempt}")
        return self.base_delay_ms * 2 ** (attempt - 1)


@dataclass(frozen=True)
class ConnectionStatus:
    state: ConnectionState = ConnectionState.IDLE
    attempt: int = 0

    @property
    def is_connected(self) -> bool:
        return self.state == ConnectionState.CONNECTED


IDLE = ConnectionStatus()
DISCONNECTED = ConnectionStatus(ConnectionState.DISCONNECTED)


@dataclass(frozen=True)
class Transition:
    """Result of feeding one signal to the machine."""

    status: ConnectionStatus
    actions: Tuple[Action, ...] = ()
    delay_ms: Optional[int] = None


def _retry_or_give_up(attempt: int, policy: ReconnectPolicy) -> Transition:
    if attempt > policy.max_attempts:
        return Transition(DISCONNECTED, (Action.CLOSE_STREAM, Action.GIVE_UP))
    return Transition(
        ConnectionStatus(ConnectionState.RECONNECTING, attempt),
        (Action.CLOSE_STREAM, Action.SCHEDULE_RETRY),
        delay_ms=policy.delay_ms(attempt),
    )


def transition(
    status: ConnectionStatus, signal: Signal, policy: ReconnectPolicy
) -> Transition:
    """
    Compute the next status and side effects for a signal.

    Signals that do not apply to the current state leave it unchanged and
    produce no actions. In particular every signal except CONNECT is a
    no-op once DISCONNECTED, which is what keeps late stream callbacks and
    timer firings from having any effect after teardown.
    """
    state = status.state
    unchanged = Transition(status)

    if signal == Signal.DISCONNECT:
        if state == ConnectionState.DISCONNECTED:
            return unchanged
        return Transition(DISCONNECTED, (Action.CANCEL_RETRY, Action.CLOSE_STREAM))

    if signal == Signal.CONNECT:
        if state in (ConnectionState.IDLE, ConnectionState.DISCONNECTED):
            return Transition(IDLE, (Action.OPEN_STREAM,))
        return unchanged

    if signal == Signal.OPENED:
        if state in (ConnectionState.IDLE, ConnectionState.RECONNECTING):
            return Transition(ConnectionStatus(ConnectionState.CONNECTED))
        return unchanged

    if signal == Signal.STREAM_LOST:
        if state in (ConnectionState.IDLE, ConnectionState.CONNECTED):
            return _retry_or_give_up(1, policy)
        if state == ConnectionState.RECONNECTING:
            return _retry_or_give_up(status.attempt + 1, policy)
        return unchanged

    if signal == Signal.RETRY_DUE:
        if state == ConnectionState.RECONNECTING:
            return Transition(status, (Action.OPEN_STREAM,))
        return unchanged

    raise ValueError(f"Unknown signal: {signal!r}")
