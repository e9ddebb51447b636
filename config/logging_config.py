"""
Logging setup shared by the server and the debug runner.
"""

import logging
from typing import Optional, Union

from .environments import get_log_level


LOG_FORMAT = "%(asctime)s %(levelname)-5s [%(name)s] %(message)s"


def configure_logging(level: Optional[Union[str, int]] = None) -> None:
    """
    Configure the root logger once.

    Args:
        level: Log level name or number (defaults to LOG_LEVEL)
    """
    if level is None:
        level = get_log_level()
    if isinstance(level, str):
        level = level.upper()

    logging.basicConfig(level=level, format=LOG_FORMAT)
    # elastic_transport logs every request at INFO
    logging.getLogger("elastic_transport").setLevel(logging.WARNING)
