import threading

import pytest

from src.core.identifiers import NFT, PROJECT, IdentifierAllocator


@pytest.mark.unit
def test_ids_start_at_one_and_increase():
    alloc = IdentifierAllocator()
    assert [alloc.next(PROJECT) for _ in range(3)] == [1, 2, 3]


@pytest.mark.unit
def test_sequences_are_independent_per_class():
    alloc = IdentifierAllocator()
    assert alloc.next(PROJECT) == 1
    assert alloc.next(PROJECT) == 2
    assert alloc.next(NFT) == 1
    assert alloc.peek(PROJECT) == 3
    assert alloc.peek(NFT) == 2


@pytest.mark.unit
def test_concurrent_allocation_never_repeats():
    alloc = IdentifierAllocator()
    seen = []
    lock = threading.Lock()

    def worker():
        local = [alloc.next(NFT) for _ in range(200)]
        with lock:
            seen.extend(local)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(seen) == list(range(1, 1601))
