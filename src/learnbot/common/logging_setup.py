"""Central logging setup for the project."""
from __future__ import annotations
import logging
import sys
from typing import TextIO

def setup_logging(level: int = logging.INFO, stream: TextIO | None = None) -> None:
    """
    Configure root logger with sane defaults.

    Args:
        level: Logging level.
        stream: Output stream; stdout for the server, stderr for the CLI.
    """
    handler = logging.StreamHandler(stream or sys.stdout)
    fmt = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
    handler.setFormatter(logging.Formatter(fmt))
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)
    # httpx logs each request URL at INFO, and the URL carries the API key.
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
