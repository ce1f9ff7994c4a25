"""create_store() — build store constructors from a setup function.

A setup function receives the primitives of one fresh store and returns a
constructor that shapes the public store object:

    def setup(get, set, subscribe, subscribers):
        def constructor(initial=None):
            set(initial)
            return get
        return constructor

    make = create_store(setup)
    counter = make(0)
    counter()                                # 0
    counter.subscribe(print)                 # prints 0 right away

Every make(...) call allocates its own state, so stores never share a value
or a subscriber list.
"""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Callable

from pocketstore._state import StoreState
from pocketstore.engine import bind

Setup = Callable[..., Callable[..., object]]


def _attach_subscribe(store: object, subscribe: Callable) -> None:
    """Give store the default subscribe unless the constructor supplied one."""
    if isinstance(store, MutableMapping):
        if "subscribe" not in store:
            store["subscribe"] = subscribe
    elif not hasattr(store, "subscribe"):
        setattr(store, "subscribe", subscribe)


def create_store(setup: Setup, *, immediate: bool = True) -> Callable[..., object]:
    """Return a factory that builds one independent store per call.

    immediate sets whether subscribe() fires the new callback once with the
    current value; subscribe(callback, immediate=...) overrides it per call.
    """

    def make_store(*args, **kwargs):
        primitives = bind(StoreState(), immediate=immediate)
        constructor = setup(*primitives)
        store = constructor(*args, **kwargs)
        _attach_subscribe(store, primitives.subscribe)
        return store

    return make_store
