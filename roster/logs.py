"""
Design (logs.py)
- Purpose: Configure the standard logging stack and forward log lines to the UI Logs panel.
- Inputs: Level name (config / environment), a sink callable for the panel.
- Outputs: None.
- Side effects: Installs handlers on the root logger.
- Thread-safety: PanelHandler calls its sink on the emitting thread; the UI reschedules onto Tk.
"""

import logging
import os
from typing import Callable, Optional

from .config import LOG_DATE_FORMAT, LOG_FORMAT, LOG_LEVEL, LOG_LEVEL_ENV


def configure_logging(level: Optional[str] = None) -> None:
    """
    Purpose: Send log records to stderr in LOG_FORMAT.
    Inputs: level name; falls back to $ROSTER_LOG_LEVEL, then LOG_LEVEL.
    """
    name = (level or os.environ.get(LOG_LEVEL_ENV) or LOG_LEVEL).upper()
    numeric = getattr(logging, name, None)
    if not isinstance(numeric, int):
        numeric = logging.INFO
    logging.basicConfig(level=numeric, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)


class PanelHandler(logging.Handler):
    """Formats each record and passes the line (newline-terminated) to sink."""

    def __init__(self, sink: Callable[[str], None], level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self.sink = sink
        self.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.sink(self.format(record) + "\n")
        except Exception:
            self.handleError(record)
