"""Ready-made setups for the two common store shapes.

    counter = create_store(callable_store)(0)
    counter()          # 0
    counter(5)         # 5 — sets and returns the new value

    point = create_store(record_store)((0, 0))
    point.get()        # (0, 0)
    point.set((1, 2))  # (1, 2)

Both constructors take an optional initial value. When omitted, nothing is
set and the store reads None.
"""

from __future__ import annotations

from typing import Callable, Protocol, runtime_checkable

from pocketstore._state import Subscriber
from pocketstore.engine import Unsubscribe

_MISSING = object()


@runtime_checkable
class Subscribable(Protocol):
    """Anything exposing subscribe(callback, immediate=None) — every built store does."""

    def subscribe(self, callback: Subscriber, immediate: bool | None = None) -> Unsubscribe | None: ...


def callable_store(get, set, subscribe, subscribers) -> Callable[..., Callable[..., object]]:
    """Store shaped as a function: call with no args to read, with args to write."""

    def constructor(initial: object = _MISSING) -> Callable[..., object]:
        if initial is not _MISSING:
            set(initial)

        def store(*args: object) -> object:
            if args:
                return set(*args)
            return get()

        return store

    return constructor


class Record:
    """Store shaped as an object with get() and set()."""

    def __init__(self, get, set, subscribers: list[Subscriber]) -> None:
        self.get = get
        self.set = set
        self._subscribers = subscribers

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def __repr__(self) -> str:
        return f"Record({self.get()!r})"


def record_store(get, set, subscribe, subscribers) -> Callable[..., Record]:
    """Setup producing Record stores; subscribe is attached by create_store."""

    def constructor(initial: object = _MISSING) -> Record:
        if initial is not _MISSING:
            set(initial)
        return Record(get, set, subscribers)

    return constructor
