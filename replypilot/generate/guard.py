from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Callable, Dict, Iterator, List

from .errors import TriggerBusyError
from .types import RequestKind

Listener = Callable[[RequestKind, bool], None]


class TriggerGuard:
    """
    Per-kind busy flags standing in for disabling the popup's buttons.

    At most one generation per kind is in flight; comment and post generation
    do not block each other. Listeners get (kind, enabled) on every change so a
    UI can mirror the state. The flag check and set happen under one lock, as
    the HTTP app shares a generator across worker threads.
    """

    def __init__(self):
        self._busy: Dict[RequestKind, bool] = {k: False for k in RequestKind}
        self._listeners: List[Listener] = []
        self._lock = threading.Lock()

    def is_enabled(self, kind: RequestKind) -> bool:
        with self._lock:
            return not self._busy[kind]

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def _notify(self, kind: RequestKind, enabled: bool):
        for listener in list(self._listeners):
            listener(kind, enabled)

    @contextmanager
    def busy(self, kind: RequestKind) -> Iterator[None]:
        with self._lock:
            if self._busy[kind]:
                raise TriggerBusyError(f"A {kind.value} generation is already running")
            self._busy[kind] = True
        try:
            self._notify(kind, False)
            yield
        finally:
            with self._lock:
                self._busy[kind] = False
            self._notify(kind, True)
