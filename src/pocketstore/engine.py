"""Notification engine — the primitives of one store, bound to its StoreState.

write() stores its first positional argument and synchronously notifies
every subscriber with all of its positional arguments. Each notification pass
walks a snapshot of the subscriber list, so subscribers may subscribe or
unsubscribe (themselves or others) from inside a callback without disturbing
the pass in progress.

bind() closes the operations over one state and returns them as plain
functions. Plain functions (unlike bound methods) accept attributes, so a
constructor may return `get` itself and still receive a `subscribe`.
"""

from __future__ import annotations

import logging
from typing import Callable, NamedTuple

from pocketstore._state import StoreState, Subscriber

logger = logging.getLogger("pocketstore.engine")

Unsubscribe = Callable[[], None]


def _index_of(subscribers: list[Subscriber], callback: Subscriber) -> int:
    """Position of callback by identity, or -1.

    list.index() compares with ==, which bound methods and objects with a
    custom __eq__ would satisfy without being the same reference.
    """
    for i, existing in enumerate(subscribers):
        if existing is callback:
            return i
    return -1


def read(state: StoreState) -> object:
    return state.value


def write(state: StoreState, *args: object) -> object:
    """Store args[0] (None if no args), notify with all args, return the value."""
    state.value = args[0] if args else None
    emit(state, *args)
    return state.value


def emit(state: StoreState, *args: object) -> None:
    """Call every subscriber registered when the pass starts, in order."""
    # Snapshot — callbacks may mutate the live list during the pass.
    batch = list(state.subscribers)
    logger.debug("Notifying %d subscriber(s)", len(batch))
    for callback in batch:
        callback(*args)


def add_subscriber(state: StoreState, callback: Subscriber, immediate: bool) -> Unsubscribe | None:
    """Register callback once. Returns an unsubscribe function, or None if already registered.

    When immediate is true, callback is called once with the current value
    right after registration.
    """
    subscribers = state.subscribers
    if _index_of(subscribers, callback) != -1:
        logger.debug("Ignoring duplicate subscribe of %r", callback)
        return None

    subscribers.append(callback)
    logger.debug("Subscribed %r (%d total)", callback, len(subscribers))

    if immediate:
        try:
            callback(state.value)
        except Exception:
            # No token reaches the caller, so the registration must not stick.
            index = _index_of(subscribers, callback)
            if index != -1:
                del subscribers[index]
            raise

    def _unsubscribe() -> None:
        index = _index_of(subscribers, callback)
        if index != -1:
            del subscribers[index]
            logger.debug("Unsubscribed %r (%d left)", callback, len(subscribers))

    return _unsubscribe


class Primitives(NamedTuple):
    """What a setup function receives, in call order."""

    get: Callable[[], object]
    set: Callable[..., object]
    subscribe: Callable[..., Unsubscribe | None]
    subscribers: list[Subscriber]


def bind(state: StoreState, *, immediate: bool = True) -> Primitives:
    """Close get/set/subscribe over state.

    immediate is the default for subscribe(); subscribe(cb, immediate=...)
    overrides it per call.
    """
    default = immediate

    def get() -> object:
        return read(state)

    def set(*args: object) -> object:
        return write(state, *args)

    def subscribe(callback: Subscriber, immediate: bool | None = None) -> Unsubscribe | None:
        return add_subscriber(state, callback, default if immediate is None else immediate)

    return Primitives(get, set, subscribe, state.subscribers)
