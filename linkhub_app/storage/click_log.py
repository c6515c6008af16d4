"""
Append-only click log.

Click records are kept apart from the mappings, indexed by short code,
behind their own lock. Purging is the only way records disappear and it
is driven by MappingStore when a mapping is deleted.
"""

import itertools
import threading
from collections import defaultdict
from typing import Dict, List, Optional

from linkhub_app.models.url import ClickRecord


class ClickLog:

    def __init__(self):
        self._records: Dict[str, List[ClickRecord]] = defaultdict(list)
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def next_id(self) -> int:
        with self._lock:
            return next(self._ids)

    def append(self, record: ClickRecord) -> ClickRecord:
        with self._lock:
            self._records[record.short_code].append(record)
        return record

    def records_for(self, short_code: str) -> List[ClickRecord]:
        """Snapshot of every record of a code, in append order"""
        with self._lock:
            return list(self._records.get(short_code, ()))

    def recent(self, short_code: str, limit: Optional[int] = None) -> List[ClickRecord]:
        """Newest records first, at most `limit` of them"""
        records = sorted(
            self.records_for(short_code),
            key=lambda r: (r.clicked_at, r.id),
            reverse=True
        )
        return records if limit is None else records[:limit]

    def count(self, short_code: str) -> int:
        with self._lock:
            return len(self._records.get(short_code, ()))

    def purge(self, short_code: str) -> int:
        """Drop all records of a code. Returns how many were removed."""
        with self._lock:
            return len(self._records.pop(short_code, ()))

    def __len__(self) -> int:
        with self._lock:
            return sum(len(records) for records in self._records.values())
