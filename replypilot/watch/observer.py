from __future__ import annotations

from typing import Callable, List, Optional

from bs4 import Tag

from replypilot.log import get_logger
from replypilot.storage import ACTIVE_POST_TEXT, SharedStore, now_ms, save_post_text
from .document import HostDocument, MutationEvent
from .extract import extract_post_text
from .injector import InjectionIndex, Injector, TriggerControl

logger = get_logger(__name__)


class FeedWatcher:
    """
    Content-side process: keeps one trigger on every post in the feed.

    ``start`` scans what is already in the document, then subscribes to the
    document's mutation events; both paths go through ``Injector.process``.
    Activating a trigger stores the post text for the popup.
    """

    def __init__(
        self,
        document: HostDocument,
        store: SharedStore,
        min_text_chars: int = 5,
        clock: Callable[[], int] = now_ms,
    ):
        self.document = document
        self.store = store
        self.min_text_chars = min_text_chars
        self.clock = clock
        self.index = InjectionIndex()
        self.injector = Injector(document.soup, self.index, on_activate=self.save_post)
        self._unsubscribe: Optional[Callable[[], None]] = None

    @property
    def running(self) -> bool:
        return self._unsubscribe is not None

    def start(self) -> List[TriggerControl]:
        if self.running:
            return []
        self._unsubscribe = self.document.subscribe(self.handle)
        injected = self.scan(self.document.body)
        logger.info("Feed watcher started, %d trigger(s) injected on initial scan", len(injected))
        return injected

    def stop(self):
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self.index.clear()

    def scan(self, root: Tag) -> List[TriggerControl]:
        return self.injector.process(MutationEvent(added=[root]))

    def handle(self, event: MutationEvent) -> List[TriggerControl]:
        for node in event.removed:
            self.index.forget(node)
        injected = self.injector.process(event)
        if injected:
            logger.debug("Injected %d trigger(s) from mutation batch", len(injected))
        return injected

    def activate(self, button: Tag) -> str:
        """Simulate a click on an injected trigger."""
        control = self.index.trigger_for(button)
        if control is None:
            raise KeyError("Not a trigger injected by this watcher")
        control.activate()
        return self.store.get([ACTIVE_POST_TEXT]).get(ACTIVE_POST_TEXT, "")

    def save_post(self, container: Tag):
        text = extract_post_text(container)
        if len(text) < self.min_text_chars:
            # stored anyway, the popup rejects input that is too short
            logger.warning("Could not extract meaningful post text.")
        save_post_text(self.store, text, clock=self.clock)
