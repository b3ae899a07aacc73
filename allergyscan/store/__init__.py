"""Store module for allergyscan."""

from allergyscan.store.base import BaseStore
from allergyscan.store.terms import TermStore, clean_term

__all__ = [
    "BaseStore",
    "TermStore",
    "clean_term",
]
