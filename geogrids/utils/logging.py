"""
Package-wide logger.

geogrids only logs warnings about inputs it accepts but does not sanitise
(e.g. unnormalised latitudes). Each distinct message is emitted once per process.
"""

__all__ = ['LOGGER', 'set_log_level', 'warn_once']

import logging
from typing import Union

LOGGER = logging.getLogger('geogrids')
LOGGER.setLevel(logging.WARNING)

_HANDLER = logging.StreamHandler()
_HANDLER.setFormatter(logging.Formatter('[%(levelname)s] %(name)s: %(message)s'))
LOGGER.addHandler(_HANDLER)

# Messages already emitted by warn_once
_SEEN_WARNINGS = set()


def set_log_level(level: Union[int, str]):
    """
    Sets the threshold of the geogrids logger.

    Args:
        level:
            A logging level, either numeric (logging.ERROR) or by name ('ERROR')
    """
    LOGGER.setLevel(level.upper() if isinstance(level, str) else level)


def warn_once(warning: str):
    """Logs a warning the first time a given message is seen"""
    if warning in _SEEN_WARNINGS:
        return

    _SEEN_WARNINGS.add(warning)
    LOGGER.warning(warning)
