# Feed watcher package: host document model, idempotent trigger injection,
# post text extraction.

from .document import HostDocument, MutationEvent
from .extract import extract_post_text
from .injector import InjectionIndex, Injector, TriggerControl, find_eligible_containers
from .observer import FeedWatcher

__all__ = [
    "HostDocument",
    "MutationEvent",
    "extract_post_text",
    "InjectionIndex",
    "Injector",
    "TriggerControl",
    "find_eligible_containers",
    "FeedWatcher",
]
