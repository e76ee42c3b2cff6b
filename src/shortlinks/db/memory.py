from __future__ import annotations

import threading
from dataclasses import replace
from datetime import datetime, timezone

from shortlinks.core.errors import NotFoundError, StoreError
from shortlinks.db.store import UrlRecord


class InMemoryUrlStore:
    """Dict-backed UrlStore with the same uniqueness rule as the table."""

    def __init__(self) -> None:
        self._records: dict[str, UrlRecord] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def create_schema(self) -> None:
        pass

    def close(self) -> None:
        pass

    def exists(self, code: str) -> bool:
        with self._lock:
            return code in self._records

    def insert(self, long_url: str, code: str) -> None:
        with self._lock:
            if code in self._records:
                raise StoreError(f"insert failed: duplicate short_url {code!r}")
            self._records[code] = UrlRecord(
                id=self._next_id,
                short_code=code,
                long_url=long_url,
                times_followed=0,
                created_at=datetime.now(timezone.utc),
            )
            self._next_id += 1

    def fetch_by_code(self, code: str) -> UrlRecord:
        with self._lock:
            record = self._records.get(code)
        if record is None:
            raise NotFoundError(f"no url for code {code!r}")
        return record

    def increment_follow_count(self, code: str) -> None:
        with self._lock:
            record = self._records.get(code)
            if record is not None:
                self._records[code] = replace(record, times_followed=record.times_followed + 1)

    def __len__(self) -> int:
        return len(self._records)
