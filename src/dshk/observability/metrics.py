"""Decode metrics: in-process counters and timing.

Intentionally simple accumulators; export them via ``snapshot()``.
"""

from __future__ import annotations

import time
from collections import Counter
from threading import Lock


class DecodeMetrics:
    """Thread-safe accumulator for one decoding session."""

    def __init__(self, name: str = "dshk") -> None:
        self.name = name
        self._lock = Lock()
        self._records: int = 0
        self._bytes: int = 0
        self._by_apid: Counter[int] = Counter()
        self._errors: Counter[str] = Counter()
        self._start_time: float = time.perf_counter()

    # ------------------------------------------------------------------ #
    #  Recording                                                           #
    # ------------------------------------------------------------------ #

    def record_decoded(self, apid: int, size: int) -> None:
        with self._lock:
            self._records += 1
            self._bytes += size
            self._by_apid[apid] += 1

    def record_error(self, kind: str) -> None:
        with self._lock:
            self._errors[kind] += 1

    # ------------------------------------------------------------------ #
    #  Querying                                                            #
    # ------------------------------------------------------------------ #

    @property
    def records(self) -> int:
        return self._records

    @property
    def bytes_consumed(self) -> int:
        return self._bytes

    @property
    def errors(self) -> int:
        return sum(self._errors.values())

    @property
    def elapsed_s(self) -> float:
        return time.perf_counter() - self._start_time

    def records_for_apid(self, apid: int) -> int:
        return self._by_apid.get(apid, 0)

    def snapshot(self) -> dict[str, object]:
        """Return a serialisable metrics snapshot."""
        with self._lock:
            return {
                "name": self.name,
                "elapsed_s": round(self.elapsed_s, 4),
                "records": self._records,
                "bytes_consumed": self._bytes,
                "records_by_apid": dict(self._by_apid),
                "errors": dict(self._errors),
            }
