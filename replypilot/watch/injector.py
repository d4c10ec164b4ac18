"""
Idempotent trigger injection.

``find_eligible_containers`` is a pure function from one mutation batch to the
post containers that still need a trigger. ``Injector`` attaches the trigger and
records the container in an ``InjectionIndex``. The container is marked before
the button goes in, so replaying a batch or scanning an overlapping subtree
never adds a second trigger.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Set

from bs4 import BeautifulSoup, Tag

from .document import MutationEvent
from .selectors import BUTTON_CLASS, BUTTON_LABEL, INTERACTION_BAR_SELECTOR, MARKER_ATTR, POST_SELECTOR


@dataclass
class TriggerControl:
    button: Tag
    container: Tag
    on_activate: Callable[[Tag], None]

    def activate(self):
        self.on_activate(self.container)


class InjectionIndex:
    """Containers that already carry a trigger, keyed by object identity.

    bs4 tags compare by markup, so two identical posts would collide in a
    plain set; ids are used instead and the tag is kept alive alongside.
    """

    def __init__(self):
        self._containers: Dict[int, Tag] = {}
        self._triggers: Dict[int, TriggerControl] = {}

    def __len__(self) -> int:
        return len(self._containers)

    def __contains__(self, container: Tag) -> bool:
        return id(container) in self._containers

    def is_injected(self, container: Tag) -> bool:
        if id(container) in self._containers:
            return True
        # container markup copied from an already processed page
        return container.has_attr(MARKER_ATTR) or container.select_one(f".{BUTTON_CLASS}") is not None

    def add(self, control: TriggerControl):
        self._containers[id(control.container)] = control.container
        self._triggers[id(control.button)] = control

    def trigger_for(self, button: Tag) -> Optional[TriggerControl]:
        return self._triggers.get(id(button))

    def triggers(self) -> List[TriggerControl]:
        return list(self._triggers.values())

    def forget(self, removed: Tag):
        """Drop entries for ``removed`` and every container inside it.

        The marker and the injected button are stripped too, so the same node
        re-attached later is treated as unseen and gets a live trigger.
        """
        gone: Set[int] = {id(removed)} | {id(t) for t in removed.find_all(True)}
        for key in [k for k in self._containers if k in gone]:
            del self._containers[key]
        for key in [k for k, c in self._triggers.items() if id(c.container) in gone]:
            control = self._triggers.pop(key)
            control.button.extract()
            if control.container.has_attr(MARKER_ATTR):
                del control.container[MARKER_ATTR]

    def clear(self):
        self._containers.clear()
        self._triggers.clear()


def _candidates(node: Tag) -> Iterable[Tag]:
    # an added node can be the post, something around posts, or a late part of a post
    if not isinstance(node, BeautifulSoup):
        closest = node.css.closest(POST_SELECTOR)
        if closest is not None:
            yield closest
    yield from node.select(POST_SELECTOR)


def find_eligible_containers(event: MutationEvent, is_injected: Callable[[Tag], bool]) -> List[Tag]:
    eligible: List[Tag] = []
    seen: Set[int] = set()
    for node in event.added:
        if not isinstance(node, Tag):
            continue
        for container in _candidates(node):
            if id(container) in seen:
                continue
            seen.add(id(container))
            if is_injected(container):
                continue
            if container.select_one(INTERACTION_BAR_SELECTOR) is None:
                # stays unseen; a later mutation may add the bar
                continue
            eligible.append(container)
    return eligible


class Injector:
    def __init__(self, soup: BeautifulSoup, index: InjectionIndex, on_activate: Callable[[Tag], None]):
        self.soup = soup
        self.index = index
        self.on_activate = on_activate

    def create_button(self) -> Tag:
        button = self.soup.new_tag("button", attrs={"class": BUTTON_CLASS, "type": "button"})
        button.string = BUTTON_LABEL
        return button

    def inject(self, container: Tag) -> Optional[TriggerControl]:
        """Attach one trigger to ``container``. Returns None if nothing was done."""
        if self.index.is_injected(container):
            return None
        bar = container.select_one(INTERACTION_BAR_SELECTOR)
        if bar is None:
            return None

        container[MARKER_ATTR] = "true"
        button = self.create_button()
        elements = bar.find_all(True, recursive=False)
        if elements:
            elements[-1].insert_before(button)
        else:
            bar.append(button)

        control = TriggerControl(button=button, container=container, on_activate=self.on_activate)
        self.index.add(control)
        return control

    def process(self, event: MutationEvent) -> List[TriggerControl]:
        injected = []
        for container in find_eligible_containers(event, self.index.is_injected):
            control = self.inject(container)
            if control is not None:
                injected.append(control)
        return injected
