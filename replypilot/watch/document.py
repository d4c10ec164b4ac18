"""
Host document model.

Wraps a BeautifulSoup tree and publishes a ``MutationEvent`` whenever a
fragment is inserted or a node removed, the way a subtree mutation observer
reports ``childList`` changes in the browser.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional

from bs4 import BeautifulSoup, Tag

MutationListener = Callable[["MutationEvent"], None]


@dataclass
class MutationEvent:
    """One batch of subtree changes. Only element nodes are listed."""
    added: List[Tag] = field(default_factory=list)
    removed: List[Tag] = field(default_factory=list)


class HostDocument:
    def __init__(self, html: str = "<html><body></body></html>", parser: str = "html.parser"):
        self.parser = parser
        self.soup = BeautifulSoup(html, parser)
        self._listeners: List[MutationListener] = []

    @classmethod
    def from_file(cls, path: str, parser: str = "html.parser") -> "HostDocument":
        with open(path, "r", encoding="utf-8") as f:
            return cls(f.read(), parser=parser)

    @property
    def body(self) -> Tag:
        return self.soup.body or self.soup

    def subscribe(self, listener: MutationListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def emit(self, event: MutationEvent):
        for listener in list(self._listeners):
            listener(event)

    def append_html(self, html: str, parent: Optional[Tag] = None) -> List[Tag]:
        """Parse ``html`` and append its top-level nodes to ``parent`` (default: body)."""
        parent = parent if parent is not None else self.body
        fragment = BeautifulSoup(html, self.parser)
        nodes = list(fragment.contents)
        added: List[Tag] = []
        for node in nodes:
            parent.append(node.extract())
            if isinstance(node, Tag):
                added.append(node)
        if added:
            self.emit(MutationEvent(added=added))
        return added

    def remove(self, node: Tag):
        node.extract()
        self.emit(MutationEvent(removed=[node]))
