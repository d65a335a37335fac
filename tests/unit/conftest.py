"""Unit test configuration - environment for isolated testing"""

import os
import tempfile
from pathlib import Path

# Set env vars BEFORE importing src.main:
# main.py loads .env and configures file logging at module level (on import)
os.environ.setdefault("LOG_FILE", str(Path(tempfile.gettempdir()) / "history-studio-tests" / "unit.log"))
os.environ.setdefault("LOG_LEVEL", "WARNING")
