import time
import uuid
from dataclasses import dataclass
from typing import Callable, Dict

@dataclass
class StoredResult:
    created_at: float
    record: dict

class ResultStore:
    """Keeps recent parse results addressable by id until their TTL lapses."""

    def __init__(self, ttl_seconds: int, now_fn: Callable[[], float] | None = None) -> None:
        self._ttl = ttl_seconds
        self._now = now_fn or time.monotonic
        self._by_id: Dict[str, StoredResult] = {}

    def _expired(self, entry: StoredResult) -> bool:
        return (self._now() - entry.created_at) > self._ttl

    def purge(self) -> int:
        to_del = [rid for rid, e in self._by_id.items() if self._expired(e)]
        for rid in to_del:
            self._by_id.pop(rid, None)
        return len(to_del)

    def put(self, record: dict) -> str:
        self.purge()
        rid = str(uuid.uuid4())
        self._by_id[rid] = StoredResult(created_at=self._now(), record=record)
        return rid

    def get(self, rid: str) -> dict:
        entry = self._by_id.get(rid)
        if entry is None or self._expired(entry):
            raise KeyError(f"Result not found or expired: {rid}")
        return entry.record

    def count(self) -> int:
        return len(self._by_id)
