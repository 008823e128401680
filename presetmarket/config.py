# presetmarket/config.py
"""
Settings for the preset marketplace.

Every value can be overridden through an environment variable so that
tests and deployments do not need to edit this file.
"""

import os

# Persistence
DATABASE_URL = os.environ.get("PRESETMARKET_DATABASE_URL", "sqlite:///./presetmarket.db")
SQL_ECHO = os.environ.get("PRESETMARKET_SQL_ECHO") == "1"

# Logging
LOG_LEVEL = os.environ.get("PRESETMARKET_LOG_LEVEL", "INFO")

# Client
API_BASE_URL = os.environ.get("PRESETMARKET_API_URL", "http://127.0.0.1:8000")
REQUEST_TIMEOUT = float(os.environ.get("PRESETMARKET_REQUEST_TIMEOUT", "10"))

# Cards show at most this many presets of a pack.
MAX_PACK_PRESETS_SHOWN = 5
