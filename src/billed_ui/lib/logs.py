"""
Logging for the Billed UI.

Every module creates its logger with ``LOG = logs.logger(__file__)``. The
file path is turned into a name under the ``billed_ui`` namespace (for
example ``billed_ui.new_bill``), so a single ``logging.getLogger("billed_ui")``
reaches the controllers, stores and the Dash adapter alike.

Optional Environment Variables:
    LOG_LEVEL: Level of the billed_ui loggers (default INFO)
"""

import logging
import os
from pathlib import Path

_LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def logger(name: str) -> logging.Logger:
    """
    Return the configured logger of a module.

    Args:
        name: Logger name, or the module's __file__.

    Returns:
        Logger with a stream handler, configured once per name.
    """
    if "/" in name or "\\" in name:
        name = f"billed_ui.{Path(name).stem}"

    log = logging.getLogger(name)
    if not log.handlers:
        log.setLevel(getattr(logging, _LOG_LEVEL, logging.INFO))
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        log.addHandler(handler)

    return log
