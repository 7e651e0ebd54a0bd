"""Pytest configuration shared across test modules."""

import os

os.environ.setdefault("SITELINKER_LOG_LEVEL", "DEBUG")
