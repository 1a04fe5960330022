"""
config.py
---------
Central configuration module. Loads all environment variables
from the .env file and exposes them as typed constants.
"""

import os
from dotenv import load_dotenv

load_dotenv()


# ── PostgreSQL ────────────────────────────────────────────
DB_HOST: str = os.getenv("DB_HOST", "localhost")
DB_PORT: int = int(os.getenv("DB_PORT", "5432"))
DB_NAME: str = os.getenv("DB_NAME", "taxi_service")
DB_USER: str = os.getenv("DB_USER", "taxi_user")
DB_PASS: str = os.getenv("DB_PASS", "")

DATABASE_URL: str = (
    f"postgresql://{DB_USER}:{DB_PASS}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
)

# ── Connection Pool ───────────────────────────────────────
DB_POOL_MIN: int = int(os.getenv("DB_POOL_MIN", "1"))
DB_POOL_MAX: int = int(os.getenv("DB_POOL_MAX", "5"))

# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FILE: str = os.getenv("LOG_FILE", "")  # empty: console only
LOG_FILE_MAX_BYTES: int = int(os.getenv("LOG_FILE_MAX_BYTES", str(10 * 1024 * 1024)))
LOG_FILE_BACKUPS: int = int(os.getenv("LOG_FILE_BACKUPS", "5"))

# Per-module overrides, e.g. "repositories.car_repo=DEBUG,db.connection=WARNING"
_raw_levels = os.getenv("LOG_MODULE_LEVELS", "")
LOG_MODULE_LEVELS: dict[str, str] = {
    name.strip(): level.strip().upper()
    for name, _, level in (item.partition("=") for item in _raw_levels.split(","))
    if name.strip() and level.strip()
}
