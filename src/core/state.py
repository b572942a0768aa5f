#!/usr/bin/env python
"""
Process-wide ledger state.

One ``LedgerState`` is created by the application factory and injected into
the project store, the marketplace ledger and the query layer. Every
read-modify-write sequence against it runs under ``state.lock``.
"""

from __future__ import annotations

import threading
import time
from typing import Callable, Dict, List

from src.core.identifiers import IdentifierAllocator
from src.models.dto import NFTRecord, Project, RoyaltyPayment, Transaction


def _wall_clock_ns() -> int:
    return time.time_ns()


class LedgerState:
    def __init__(
        self,
        allocator: IdentifierAllocator | None = None,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self.lock = threading.RLock()
        self.allocator = allocator or IdentifierAllocator()
        # Nanosecond timestamps for mint/sale records
        self.clock: Callable[[], int] = clock or _wall_clock_ns
        self.projects: Dict[int, Project] = {}
        self.nfts: Dict[int, NFTRecord] = {}
        self.transactions: List[Transaction] = []
        self.royalty_payments: List[RoyaltyPayment] = []

    def now(self) -> int:
        return int(self.clock())


__all__ = ["LedgerState"]
