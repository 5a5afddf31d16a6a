# mydpo/core/logging.py
import logging
import sys

from mydpo.core.config import settings
from mydpo.utils.logger import JsonFormatter

PLAIN_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging() -> None:
    """
    Configure the root logger once per process.
    Safe to call again (handlers are replaced, not stacked).
    """
    root = logging.getLogger()

    handler = logging.StreamHandler(sys.stdout)
    if settings.log_json:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT))

    root.handlers = [handler]
    root.setLevel(settings.log_level.upper())

    # uvicorn ships its own handlers
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).handlers = []
        logging.getLogger(name).propagate = True
