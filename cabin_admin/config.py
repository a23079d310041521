import os

from dotenv import load_dotenv

load_dotenv()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
DEBUG = LOG_LEVEL == "DEBUG"

DATABASE_URL = os.getenv("DATABASE_URL")
if not DATABASE_URL:
    raise ValueError("DATABASE_URL must be set in the environment")

# Supabase keeps the booking tables in "public"; leave unset to use the connection default
SCHEMA = os.getenv("DB_SCHEMA") or None

ALLOWED_ORIGINS_RAW = os.getenv("ALLOWED_ORIGINS")
if not ALLOWED_ORIGINS_RAW:
    raise ValueError("ALLOWED_ORIGINS must be set in the environment")

ALLOWED_ORIGINS: list[str] = [
    origin.strip() for origin in ALLOWED_ORIGINS_RAW.split(",")
]

# Identity provider (Supabase GoTrue compatible)
AUTH_URL = os.getenv("AUTH_URL", "http://localhost:54321/")
AUTH_API_KEY = os.getenv("AUTH_API_KEY", "")
SESSION_CACHE_TTL_SECONDS = int(os.getenv("SESSION_CACHE_TTL_SECONDS", "60"))

SUPPORTED_LOCALES = ("es", "en")
DEFAULT_LOCALE = os.getenv("DEFAULT_LOCALE", "es")
DEFAULT_CURRENCY = os.getenv("DEFAULT_CURRENCY", "CLP")

ALERT_WINDOW_DAYS = int(os.getenv("ALERT_WINDOW_DAYS", "3"))
RECENT_PAYMENTS_DAYS = int(os.getenv("RECENT_PAYMENTS_DAYS", "7"))
