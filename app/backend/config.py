"""
Environment Configuration

All settings come from environment variables so the same image runs locally,
in staging and in production:

- DATABASE_URL: Full PostgreSQL URL (preferred when set)
- DB_HOST / DB_PORT / DB_NAME / DB_USER / DB_PASSWORD: Used when DATABASE_URL is unset
- DB_SSLMODE: libpq sslmode when building the URL from parts
- DB_SSL: "true" forces sslmode=require
- DB_CONN_TIMEOUT_MS: Connection timeout in milliseconds (default: 15000)
- CORS_ORIGIN: Comma-separated list of allowed origins (default: http://localhost:5173)
- CORS_CREDENTIALS: "true" to allow credentialed CORS requests
- LOG_LEVEL: Root log level (default: INFO)
"""

import os
from typing import List, Tuple
from urllib.parse import urlsplit, urlunsplit, parse_qsl, urlencode

DEFAULT_CORS_ORIGIN = "http://localhost:5173"
DEFAULT_CONN_TIMEOUT_MS = 15000

API_NAME = "WIMS Backend"
API_VERSION = "0.1.0"


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() == "true"


def get_raw_database_url() -> str:
    """
    Get the database URL before sanitising.

    DATABASE_URL wins; otherwise the URL is assembled from the DB_* variables.
    """
    url = os.getenv("DATABASE_URL")
    if url:
        return url

    host = os.getenv('DB_HOST', 'localhost')
    port = os.getenv('DB_PORT', '5432')
    database = os.getenv('DB_NAME', 'wims')
    user = os.getenv('DB_USER', 'postgres')
    password = os.getenv('DB_PASSWORD', 'password')
    sslmode = os.getenv('DB_SSLMODE', '')

    url = f"postgresql://{user}:{password}@{host}:{port}/{database}"
    if sslmode:
        url += f"?sslmode={sslmode}"
    return url


def sanitize_database_url(raw_url: str, force_ssl: bool = False) -> Tuple[str, bool]:
    """
    Prepare a PostgreSQL URL for SQLAlchemy/psycopg2.

    - postgres:// is rewritten to postgresql:// (SQLAlchemy rejects the short scheme)
    - channel_binding is dropped
    - sslmode=require in the URL, or force_ssl, means SSL is required

    Args:
        raw_url: URL as configured
        force_ssl: Require SSL even if the URL does not ask for it

    Returns:
        Tuple of (sanitised URL, whether SSL is required)
    """
    parts = urlsplit(raw_url)
    scheme = parts.scheme
    if scheme == "postgres":
        scheme = "postgresql"

    query = [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True) if k != "channel_binding"]
    ssl_required = force_ssl or any(k == "sslmode" and v == "require" for k, v in query)
    if ssl_required and not any(k == "sslmode" for k, _ in query):
        query.append(("sslmode", "require"))

    url = urlunsplit((scheme, parts.netloc, parts.path, urlencode(query), parts.fragment))
    return url, ssl_required


def get_database_url() -> str:
    """
    Get the sanitised database URL for SQLAlchemy.

    Returns:
        Database URL string
    """
    url, _ = sanitize_database_url(get_raw_database_url(), force_ssl=_env_flag("DB_SSL"))
    return url


def describe_database_url(url: str) -> str:
    """Return "host:port ssl=<bool>" for logging. Never includes credentials."""
    parts = urlsplit(url)
    ssl = "sslmode=require" in parts.query
    return f"{parts.hostname or 'localhost'}:{parts.port or 5432} ssl={ssl}"


def get_connect_timeout() -> int:
    """Connection timeout in whole seconds (libpq's connect_timeout unit)."""
    try:
        millis = int(os.getenv("DB_CONN_TIMEOUT_MS", "") or DEFAULT_CONN_TIMEOUT_MS)
    except ValueError:
        millis = DEFAULT_CONN_TIMEOUT_MS
    if millis <= 0:
        millis = DEFAULT_CONN_TIMEOUT_MS
    return max(1, millis // 1000)


def get_cors_origins() -> List[str]:
    """Allowed CORS origins from CORS_ORIGIN (comma-separated)."""
    raw = os.getenv("CORS_ORIGIN")
    if not raw:
        return [DEFAULT_CORS_ORIGIN]
    origins = [o.strip() for o in raw.split(",") if o.strip()]
    return origins or [DEFAULT_CORS_ORIGIN]


def get_cors_credentials() -> bool:
    return _env_flag("CORS_CREDENTIALS")


def get_log_level(default: str = "INFO") -> str:
    return (os.getenv("LOG_LEVEL") or default).upper()
