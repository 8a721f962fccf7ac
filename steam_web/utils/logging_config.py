"""
Logging Configuration
"""

import logging
from steam_web.config.settings import LOG_LEVEL, LOG_FORMAT

# Libraries that log every connection at DEBUG/INFO
NOISY_LOGGERS = ['urllib3', 'requests']

def setup_logging(level: str = LOG_LEVEL, format_str: str = LOG_FORMAT, quiet_libraries: bool = True):
    """
    Set up logging for scripts using steam_web.

    Args:
        level: Logging level name for steam_web (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_str: Log message format string
        quiet_libraries: Keep urllib3/requests at WARNING whatever the level is
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=format_str,
        handlers=[
            logging.StreamHandler(),
        ]
    )

    if quiet_libraries:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
