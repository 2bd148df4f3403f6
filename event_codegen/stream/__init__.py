"""
Event stream runtime.

A Python counterpart of the generated TypeScript client: the same reconnect
state machine, driving a requests-based Server-Sent Events transport.
"""

from .machine import (
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
    iter_sse_events,
)
from .client import (
    StreamClient,
    connect,
    create_client,
    disconnect,
    dispose_default_client,
    get_default_client,
    on_all_events,
    on_event,
)

__all__ = [
    "Action",
    "ConnectionState",
    "ConnectionStatus",
    "ReconnectPolicy",
    "Signal",
    "Transition",
    "transition",
    "Scheduler",
    "SSETransport",
    "StreamHandle",
    "ThreadingScheduler",
    "TimerHandle",
    "Transport",
    "iter_sse_events",
    "StreamClient",
    "connect",
    "create_client",
    "disconnect",
    "dispose_default_client",
    "get_default_client",
    "on_all_events",
    "on_event",
]
