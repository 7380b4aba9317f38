from __future__ import annotations

import os
from typing import Any


def _env_true(name: str, default: str = "1") -> bool:
    v = os.getenv(name, default)
    return str(v).lower() in {"1", "true", "yes", "y", "on"}


def load_config() -> dict[str, Any]:
    """Read application settings from the environment.

    Env vars:
      - SECRET_KEY
      - DATABASE_URL          e.g. sqlite:///database.sqlite or postgresql+psycopg://...
      - LOG_LEVEL             DEBUG | INFO | WARNING | ...
      - SEED_DEMO_DATA        seed demo campaigns into an empty store at start-up
      - PROGRAMS_IMPORT_PATH  CSV/XLSX loaded into an empty programs table at start-up
    """
    return {
        "SECRET_KEY": os.getenv("SECRET_KEY", "dev-not-secret"),
        "SQLALCHEMY_DATABASE_URI": os.getenv("DATABASE_URL", "sqlite:///database.sqlite"),
        "SQLALCHEMY_TRACK_MODIFICATIONS": False,
        "LOG_LEVEL": (os.getenv("LOG_LEVEL", "INFO") or "INFO").strip().upper(),
        "SEED_DEMO_DATA": _env_true("SEED_DEMO_DATA", "1"),
        "PROGRAMS_IMPORT_PATH": (os.getenv("PROGRAMS_IMPORT_PATH", "programs_data.csv") or "").strip() or None,
    }
