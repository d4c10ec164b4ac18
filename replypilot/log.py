"""Named loggers with a single stream handler on the package root."""

import logging

_FORMAT = "%(asctime)s %(levelname)s: %(message)s"
_ROOT = "replypilot"


def configure_logging(level: str = "INFO") -> logging.Logger:
    root = logging.getLogger(_ROOT)
    if not root.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(h)
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    return root


def get_logger(name: str) -> logging.Logger:
    if not name.startswith(_ROOT):
        name = f"{_ROOT}.{name}"
    return logging.getLogger(name)
