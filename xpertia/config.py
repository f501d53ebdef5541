"""
Centralized configuration for the Xpertia student progress core.

Settings come from environment variables. Entry points load ``.env.local``
and ``.env`` with python-dotenv before reading them.
"""

import logging
import os

import sentry_sdk

from xpertia.session import Session

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:3000"
API_PREFIX = "/api/v1"


class ConfigError(Exception):
    """Raised when an environment variable holds an unusable value."""

    pass


def is_dev_mode() -> bool:
    """Check if running in development mode (DEV_MODE env)."""
    return os.getenv("DEV_MODE", "").lower() in ("true", "1", "yes")


def get_api_url() -> str:
    """Get the student API base URL, always ending in /api/v1."""
    return normalize_api_url(os.getenv("XPERTIA_API_URL") or DEFAULT_API_URL)


def normalize_api_url(url: str) -> str:
    url = url.rstrip("/")
    if url.endswith(API_PREFIX):
        return url
    return f"{url}{API_PREFIX}"


def _get_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}")
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {raw!r}")
    return value


def get_autosave_interval() -> float:
    """Debounce interval for auto-save, in seconds (default 10)."""
    return _get_float("AUTOSAVE_INTERVAL_S", 10.0)


def get_api_timeout() -> float:
    """HTTP timeout for student API calls, in seconds (default 30)."""
    return _get_float("API_TIMEOUT_S", 30.0)


def session_from_env() -> Session:
    """Build a Session from XPERTIA_STUDENT_ID / XPERTIA_COHORT_ID / XPERTIA_API_TOKEN."""
    return Session(
        student_id=os.getenv("XPERTIA_STUDENT_ID") or None,
        cohort_id=os.getenv("XPERTIA_COHORT_ID") or None,
        auth_token=os.getenv("XPERTIA_API_TOKEN") or None,
    )


def init_sentry() -> bool:
    """Initialize Sentry if SENTRY_DSN is set. Returns True if initialized."""
    dsn = os.getenv("SENTRY_DSN")
    if not dsn:
        return False
    sentry_sdk.init(
        dsn=dsn,
        environment=os.getenv(
            "SENTRY_ENVIRONMENT", "development" if is_dev_mode() else "production"
        ),
    )
    logger.info("Sentry initialized")
    return True


# Format: (name, description, required_in_dev)
REQUIRED_ENV_VARS = [
    ("XPERTIA_API_URL", "Student API base URL", False),
    ("XPERTIA_API_TOKEN", "Bearer token for the student API", True),
    ("XPERTIA_STUDENT_ID", "Student record id (estudiante:...)", True),
    ("XPERTIA_COHORT_ID", "Cohort record id (cohorte:...)", True),
    ("SENTRY_DSN", "Sentry DSN for error reporting", False),
]


def check_required_env_vars() -> tuple[bool, list[str]]:
    """
    Check that required environment variables are set.

    Returns:
        (all_ok, warnings): Tuple of success flag and list of warning messages
    """
    warnings = []
    errors = []
    in_dev = is_dev_mode()

    for name, description, required_in_dev in REQUIRED_ENV_VARS:
        if os.environ.get(name):
            continue
        if required_in_dev:
            errors.append(f"  ✗ {name}: Not set ({description})")
        elif not in_dev:
            warnings.append(f"  ⚠ {name}: Not set ({description})")

    if errors:
        for error in errors:
            logger.error(error)
        return False, warnings

    return True, warnings
