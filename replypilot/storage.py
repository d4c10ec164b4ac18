"""Shared key-value store between the feed watcher and the popup.

A single SQLite table of JSON-encoded values. ``set`` is last-write-wins with
no transaction across keys; listeners registered with ``on_change`` get the
mapping of keys that changed, the way the extension's storage change event does.
"""

from __future__ import annotations

import json
import sqlite3
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from replypilot.log import get_logger

logger = get_logger(__name__)

ACTIVE_POST_TEXT = "activePostText"
USER_TONE = "userTone"
REQUESTED_AT = "requestedAt"

ChangeListener = Callable[[Dict[str, Any]], None]


class SharedStore:
    def __init__(self, path: str = ":memory:"):
        self.path = path
        if path != ":memory:":
            Path(path).parent.mkdir(parents=True, exist_ok=True)
        self._conn: Optional[sqlite3.Connection] = None
        self._listeners: List[ChangeListener] = []
        # one connection is shared by the HTTP worker threads
        self._lock = threading.RLock()

    def _get_conn(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = sqlite3.connect(self.path, check_same_thread=False)
            self._conn.execute(
                "CREATE TABLE IF NOT EXISTS kv (key TEXT PRIMARY KEY, value TEXT NOT NULL);"
            )
            self._conn.commit()
        return self._conn

    def get(self, keys: Iterable[str]) -> Dict[str, Any]:
        """Return the stored values for ``keys``; missing keys are left out."""
        keys = list(keys)
        if not keys:
            return {}
        marks = ",".join("?" for _ in keys)
        with self._lock:
            rows = self._get_conn().execute(
                f"SELECT key, value FROM kv WHERE key IN ({marks});", keys
            ).fetchall()
        return {k: json.loads(v) for k, v in rows}

    def set(self, mapping: Mapping[str, Any]) -> None:
        if not mapping:
            return
        rows = [(k, json.dumps(v)) for k, v in mapping.items()]
        with self._lock:
            conn = self._get_conn()
            conn.executemany(
                "INSERT INTO kv(key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value;",
                rows,
            )
            conn.commit()
        changes = dict(mapping)
        for listener in list(self._listeners):
            listener(changes)

    def on_change(self, listener: ChangeListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def close(self):
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None


@dataclass
class SharedState:
    active_post_text: Optional[str] = None
    user_tone: Optional[str] = None
    requested_at: Optional[int] = None

    @classmethod
    def load(cls, store: SharedStore) -> "SharedState":
        data = store.get([ACTIVE_POST_TEXT, USER_TONE, REQUESTED_AT])
        return cls(
            active_post_text=data.get(ACTIVE_POST_TEXT),
            user_tone=data.get(USER_TONE),
            requested_at=data.get(REQUESTED_AT),
        )


def now_ms() -> int:
    return int(time.time() * 1000)


def save_post_text(store: SharedStore, text: str, clock: Callable[[], int] = now_ms) -> None:
    store.set({ACTIVE_POST_TEXT: text, REQUESTED_AT: clock()})
    logger.info("Post text saved to storage: %s...", text[:100])


def save_tone(store: SharedStore, tone: str) -> None:
    store.set({USER_TONE: tone})
