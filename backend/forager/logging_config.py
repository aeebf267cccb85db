"""Logging configuration for the forager package."""

import logging
import os
import sys

# pytest may not have set its env vars yet at import time
_is_testing = (
    "PYTEST_CURRENT_TEST" in os.environ
    or os.environ.get("TESTING") == "1"
    or "pytest" in sys.modules
)

_level_name = os.environ.get("FORAGER_LOG_LEVEL", "WARNING" if _is_testing else "INFO")

logging.basicConfig(
    format="%(asctime)s - %(levelname)s - %(message)s",
    level=getattr(logging, _level_name.upper(), logging.INFO),
)

# Keep server access logs out of simulation output
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

logger = logging.getLogger("forager")
