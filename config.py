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
DB_NAME: str = os.getenv("DB_NAME", "springbook")
DB_USER: str = os.getenv("DB_USER", "spring")
DB_PASS: str = os.getenv("DB_PASS", "book")

DATABASE_URL: str = os.getenv(
    "DATABASE_URL",
    f"postgresql://{DB_USER}:{DB_PASS}@{DB_HOST}:{DB_PORT}/{DB_NAME}",
)

# ── Connection provisioning ───────────────────────────────
DB_POOLED: bool = os.getenv("DB_POOLED", "false").strip().lower() in ("1", "true", "yes")
DB_POOL_MIN: int = int(os.getenv("DB_POOL_MIN", "1"))
DB_POOL_MAX: int = int(os.getenv("DB_POOL_MAX", "5"))

# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
