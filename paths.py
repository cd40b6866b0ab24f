# paths.py

from pathlib import Path

# Project root (this file lives in the root directory)
ROOT = Path(__file__).parent

# Optional environment file read at startup
ENV_FILE = ROOT / ".env"
