"""Application configuration and constants."""
import os
from pathlib import Path


def _parse_int_env(name: str, default: int) -> int:
    """Parse integer from environment variable."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


# Database
DB_DIR = Path(os.environ.get("DB_DIR", Path.cwd() / "data"))
DB_DIR.mkdir(parents=True, exist_ok=True)
DATABASE_URL = os.environ.get(
    "DATABASE_URL", f"sqlite:///{DB_DIR / 'crackit.db'}"
)

# Authentication
SECRET_KEY = os.environ.get(
    "SECRET_KEY",
    "CHANGE_ME_IN_PRODUCTION_USE_openssl_rand_hex_32"
)
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = _parse_int_env("ACCESS_TOKEN_EXPIRE_MINUTES", 60)
SESSION_EXTEND_MINUTES = _parse_int_env("SESSION_EXTEND_MINUTES", 60)
SESSION_CLEANUP_INTERVAL_SECONDS = _parse_int_env(
    "SESSION_CLEANUP_INTERVAL_SECONDS", 24 * 60 * 60
)
BCRYPT_ROUNDS = _parse_int_env("BCRYPT_ROUNDS", 12)

# Page clients land on after signing in
SIGN_IN_REDIRECT = "/tests"

# Generative language API
GEMINI_API_KEY = os.environ.get("GEMINI_API_KEY", "")
GEMINI_MODEL = os.environ.get("GEMINI_MODEL", "gemini-2.0-flash")
GEMINI_API_URL = os.environ.get(
    "GEMINI_API_URL", "https://generativelanguage.googleapis.com/v1beta"
)
GENERATED_QUESTION_COUNT = _parse_int_env("GENERATED_QUESTION_COUNT", 10)

# Document conversion
CONVERT_API_SECRET = os.environ.get("CONVERT_API_SECRET", "")
CONVERT_API_URL = os.environ.get("CONVERT_API_URL", "https://v2.convertapi.com")
UPLOAD_MAX_BYTES = _parse_int_env("UPLOAD_MAX_BYTES", 20 * 1024 * 1024)  # 20 MB

REQUEST_TIMEOUT_SECONDS = _parse_int_env("REQUEST_TIMEOUT_SECONDS", 60)

# Search
SEARCH_MIN_TERM_LENGTH = _parse_int_env("SEARCH_MIN_TERM_LENGTH", 2)
