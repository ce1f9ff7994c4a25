"""State record — the plain data owned by one store instance.

Separating data from behavior keeps ownership explicit: one StoreState per
store, handed by reference to engine.bind(), whose closures operate on it.
"""

from __future__ import annotations

from typing import Callable

Subscriber = Callable[..., object]


class StoreState:
    """Private value slot and subscriber list of a single store instance."""

    __slots__ = ("value", "subscribers")

    def __init__(self) -> None:
        self.value: object = None
        # Insertion order is notification order. No duplicates (by identity).
        self.subscribers: list[Subscriber] = []

    def __repr__(self) -> str:
        return f"StoreState({self.value!r}, subscribers={len(self.subscribers)})"
