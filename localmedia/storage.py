# localmedia/storage.py
import json
import logging
import os
from pathlib import Path
from threading import Lock

log = logging.getLogger(__name__)

class JsonStore:
    """A whole JSON array kept in a single file.

    Reads never fail: a missing, unreadable or corrupt file reads as an empty
    list. Writes replace the whole file and let I/O errors propagate.
    """

    def __init__(self, path):
        self.path = Path(path)
        # held by callers around a read-modify-write
        self.lock = Lock()

    def read(self):
        p = self.path
        if not p.exists():
            return []
        try:
            with p.open("r", encoding="utf-8") as f:
                text = f.read()
        except OSError as e:
            log.warning("Could not read %s, treating as empty: %s", p, e)
            return []
        if not text.strip():
            return []
        try:
            data = json.loads(text)
        except ValueError as e:
            log.warning("Corrupt JSON in %s, treating as empty: %s", p, e)
            return []
        if data is None:
            return []
        if not isinstance(data, list):
            log.warning("%s does not hold a JSON array, treating as empty", p)
            return []
        return data

    def write(self, records):
        # readers only ever see the old file or the new one
        tmp = self.path.with_name(self.path.name + ".tmp")
        with tmp.open("w", encoding="utf-8") as f:
            json.dump(records, f, ensure_ascii=False, indent=2)
        os.replace(tmp, self.path)

class MemoryStore:
    """Same surface as JsonStore, kept in memory."""

    def __init__(self, records=None):
        self.records = list(records or [])
        self.lock = Lock()
        self.writes = 0

    def read(self): return json.loads(json.dumps(self.records))

    def write(self, records):
        self.records = json.loads(json.dumps(records))
        self.writes += 1
