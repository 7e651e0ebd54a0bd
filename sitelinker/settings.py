"""Runtime settings for sitelinker.

Values are read from the environment so the engine can be tuned per
deployment without code changes. ``configure_logging`` installs the
``LOGGING`` dictionary below via :func:`logging.config.dictConfig`.
"""

from __future__ import annotations

import logging.config
import os

from .engine.config import EngineConfig, load_config

log_level = os.getenv('SITELINKER_LOG_LEVEL', 'INFO').upper()
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {
            'format': '%(asctime)s %(levelname)s [%(name)s] %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': log_level,
    },
    'loggers': {
        'sitelinker': {
            'handlers': ['console'],
            'level': log_level,
            'propagate': False,
        },
    },
}


def configure_logging() -> None:
    """Apply :data:`LOGGING` to the standard logging module."""

    logging.config.dictConfig(LOGGING)


def engine_config() -> EngineConfig:
    """Load the engine configuration named by ``SITELINKER_CONFIG``.

    The variable is read on every call, so engines built later pick up a
    new YAML override file without re-importing this module.
    """

    return load_config(os.getenv('SITELINKER_CONFIG') or None)
