# ruff: noqa: INP001
"""Pytest configuration shared across backend tests."""

import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Settings are read at import time; keep tests off the developer's data file
# and independent of any shell or `.env` overrides.
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["SEED_ON_FIRST_RUN"] = "true"
os.environ["WEEK_STARTS_ON"] = "sunday"
os.environ["LOG_FORMAT"] = "text"
