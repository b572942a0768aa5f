#!/usr/bin/env python
"""Monotonic identifier allocation, one sequence per entity class."""

from __future__ import annotations

import threading
from typing import Dict

PROJECT = "project"
NFT = "nft"


class IdentifierAllocator:
    """Issue strictly increasing ids starting at 1.

    Each entity class has its own sequence. An id is consumed as soon as it
    is handed out; nothing is ever returned to the pool.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._next: Dict[str, int] = {}

    def next(self, entity_class: str) -> int:
        with self._lock:
            current = self._next.get(entity_class, 1)
            self._next[entity_class] = current + 1
            return current

    def peek(self, entity_class: str) -> int:
        """Return the id the next call for ``entity_class`` would issue."""
        with self._lock:
            return self._next.get(entity_class, 1)


__all__ = ["IdentifierAllocator", "PROJECT", "NFT"]
