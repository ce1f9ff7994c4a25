"""pocketstore: observable value containers built from a setup function."""

from importlib.metadata import version as _version

__version__ = _version("pocketstore")

from pocketstore._state import StoreState
from pocketstore.engine import Primitives, Unsubscribe, bind
from pocketstore.factory import create_store
from pocketstore.shapes import Record, Subscribable, callable_store, record_store
# textual NOT auto-imported — opt-in only

__all__ = [
    "create_store",
    "callable_store",
    "record_store",
    "Record",
    "Subscribable",
    "StoreState",
    "Primitives",
    "Unsubscribe",
    "bind",
]
