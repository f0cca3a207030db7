import logging
import sys

from intake.config import settings

_ROOT = "intake"
_configured = False


def _configure() -> None:
    global _configured
    root = logging.getLogger(_ROOT)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s"))
        root.addHandler(handler)
    root.setLevel(settings.log_level.upper())
    root.propagate = True
    _configured = True


def get_logger(name: str) -> logging.Logger:
    if not _configured:
        _configure()
    return logging.getLogger(f"{_ROOT}.{name}")
