import threading
from collections.abc import Iterator
from contextlib import contextmanager


class DocumentLocks:
    """Per-document mutexes so two runs on the same document never interleave."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}
        self._holders: dict[str, int] = {}

    @contextmanager
    def hold(self, document_id: str) -> Iterator[None]:
        with self._guard:
            lock = self._locks.setdefault(document_id, threading.Lock())
            self._holders[document_id] = self._holders.get(document_id, 0) + 1
        try:
            with lock:
                yield
        finally:
            with self._guard:
                self._holders[document_id] -= 1
                if self._holders[document_id] == 0:
                    del self._holders[document_id]
                    del self._locks[document_id]

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)
