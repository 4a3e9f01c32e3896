# localmedia/crud.py
import math
import time
from threading import Lock

class TimestampIds:
    """Millisecond-timestamp ids that never repeat within one process."""

    def __init__(self, clock=time.time):
        self.clock = clock
        self._last = 0
        self._lock = Lock()

    def __call__(self):
        with self._lock:
            now = int(self.clock() * 1000)
            if now <= self._last:
                now = self._last + 1
            self._last = now
            return now

def _usable_id(value):
    # bool is an int subclass; JSON true/false is not an id
    return isinstance(value, int) and not isinstance(value, bool) and value != 0

def coerce_id(raw):
    """Path id -> number, or None when it is not numeric."""
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    if math.isnan(value):
        return None
    return value

def _matches(record, target):
    rid = record.get("id") if isinstance(record, dict) else None
    if isinstance(rid, bool) or not isinstance(rid, (int, float)):
        return False
    return target is not None and rid == target

# Records
def list_records(store):
    with store.lock:
        return store.read()

def create_record(store, payload, next_id):
    item = dict(payload)
    if not _usable_id(item.get("id")):
        item["id"] = next_id()
    with store.lock:
        items = store.read()
        items.append(item)
        store.write(items)
    return item

def update_record(store, raw_id, payload):
    """Shallow-merge payload over the first record with this id; None if absent."""
    target = coerce_id(raw_id)
    with store.lock:
        items = store.read()
        for idx, rec in enumerate(items):
            if _matches(rec, target):
                merged = {**rec, **payload}
                items[idx] = merged
                store.write(items)
                return merged
    return None

def delete_record(store, raw_id):
    target = coerce_id(raw_id)
    with store.lock:
        items = store.read()
        kept = [r for r in items if not _matches(r, target)]
        store.write(kept)
    return len(items) - len(kept)
