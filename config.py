# config.py
"""
Application configuration loaded from the environment.

Values come from a local .env file (python-dotenv) or the process
environment. Fixed security constants live here as well so every
module reads them from one place.
"""
import os

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_bool(name: str, default: str = "false") -> bool:
     return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# Database
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./flat_tracker.db")
SQL_ECHO = _env_bool("SQL_ECHO")
DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "5"))
DB_MAX_OVERFLOW = int(os.getenv("DB_MAX_OVERFLOW", "10"))
AUTO_CREATE_TABLES = _env_bool("AUTO_CREATE_TABLES", "true")

# Auth
JWT_SECRET = os.getenv("JWT_SECRET", "your-secret-key-change-this-in-production")
JWT_ALGORITHM = "HS256"
TOKEN_LIFETIME_DAYS = 7
BCRYPT_ROUNDS = 12
MIN_PASSWORD_LENGTH = 6
SESSION_COOKIE_NAME = "auth-token"

# Runtime
ENVIRONMENT = os.getenv("ENVIRONMENT", "development").strip().lower()
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()]
PORT = int(os.getenv("PORT", "10000"))

# Geocoding (Nominatim)
GEOCODER_URL = os.getenv("GEOCODER_URL", "https://nominatim.openstreetmap.org/search")
GEOCODER_COUNTRY_CODES = os.getenv("GEOCODER_COUNTRY_CODES", "es")
GEOCODER_USER_AGENT = os.getenv("GEOCODER_USER_AGENT", "SharedFlatTracker/1.0")
GEOCODER_RETRIES = int(os.getenv("GEOCODER_RETRIES", "5"))
GEOCODER_BACKOFF_SECONDS = float(os.getenv("GEOCODER_BACKOFF_SECONDS", "1.0"))
GEOCODER_TIMEOUT_SECONDS = float(os.getenv("GEOCODER_TIMEOUT_SECONDS", "10"))


def secure_cookies() -> bool:
     """Session cookies are flagged secure everywhere except local development."""
     return ENVIRONMENT not in ("development", "dev", "local", "test")
