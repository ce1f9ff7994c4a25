"""Textual integration for pocketstore. Opt-in — requires textual.

Store notifications run synchronously on whatever thread called set(). The
helpers here sit between a store and a Textual app: they drop deliveries
while the app cannot be queried, marshal background-thread deliveries onto
the app thread, and ignore NoMatches from widget lookups.
"""

import logging
import threading
import weakref
from collections.abc import Mapping
from contextlib import contextmanager

from textual.css.query import NoMatches

logger = logging.getLogger("pocketstore.textual")

# Apps whose store deliveries are currently held back, by id(app).
# An id is present only while inside that app's pause() block.
_held_apps: set[int] = set()

# store subscribe function -> {(id(app), callback): wrapper}. Handing the
# store the same wrapper for a repeat registration keeps its duplicate check
# working across bridge calls.
_wrappers: "weakref.WeakKeyDictionary" = weakref.WeakKeyDictionary()


@contextmanager
def pause(app):
    """Hold back store deliveries to app, e.g. while its widgets are replaced."""
    _held_apps.add(id(app))
    try:
        yield
    finally:
        _held_apps.discard(id(app))


def is_safe(app) -> bool:
    """Can a store delivery touch app's widgets right now?"""
    return app.is_running and id(app) not in _held_apps


def _subscribe_of(store):
    if isinstance(store, Mapping):
        return store["subscribe"]
    return store.subscribe


def _wrappers_for(subscribe_fn) -> dict:
    try:
        return _wrappers.setdefault(subscribe_fn, {})
    except TypeError:
        # Not weak-referenceable (e.g. a builtin); repeat calls get fresh wrappers.
        return {}


def _guard(app, callback):
    _main = threading.get_ident()

    def _guarded(*args):
        if not is_safe(app):
            return
        if threading.get_ident() != _main:
            app.call_from_thread(_safe, *args)
        else:
            _safe(*args)

    def _safe(*args):
        try:
            callback(*args)
        except NoMatches:
            logger.debug("Widget query failed in %r, delivery dropped", callback)

    return _guarded


def subscribe(app, store, callback, immediate=None):
    """store.subscribe() that safely bridges to Textual widgets.

    Bridging the same callback to the same store and app again reuses the
    first wrapper, so the store sees a duplicate. Returns whatever the
    store's subscribe returns: an unsubscribe function, or None when the
    store ignored the registration.
    """
    subscribe_fn = _subscribe_of(store)
    wrappers = _wrappers_for(subscribe_fn)
    key = (id(app), callback)
    guarded = wrappers.get(key)
    if guarded is None:
        guarded = wrappers[key] = _guard(app, callback)

    if immediate is None:
        return subscribe_fn(guarded)
    return subscribe_fn(guarded, immediate)
