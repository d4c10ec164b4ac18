# Reply Pilot package

# Feed watcher (content side) + generation pipeline (popup side),
# connected only through the shared store.

from .settings import settings
from .log import configure_logging

configure_logging(settings.LOG_LEVEL)

__version__ = "0.3.0"

__all__ = ["settings", "configure_logging", "__version__"]
