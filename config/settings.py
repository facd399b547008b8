"""
Farm Market – Django Settings (Infrastructure Only)
=====================================================
Django serves as the HTTP container for the marketplace registry.
The registry is the authority — Django does not dictate structure.

Every value below can be overridden from the environment.
"""

import os
from pathlib import Path

# ── Paths ─────────────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent.parent


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


# ── Security ──────────────────────────────────────────────────
SECRET_KEY = os.environ.get(
    "MARKET_SECRET_KEY", "farm-market-dev-key-replace-before-deployment"
)

DEBUG = _env_bool("MARKET_DEBUG", True)

ALLOWED_HOSTS = [
    host.strip()
    for host in os.environ.get(
        "MARKET_ALLOWED_HOSTS", "localhost,127.0.0.1,testserver"
    ).split(",")
    if host.strip()
]

# ── Installed Apps ────────────────────────────────────────────
# No models: listings live in the registry and its journal.
INSTALLED_APPS = []

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

# ── URL & WSGI ────────────────────────────────────────────────
ROOT_URLCONF = "config.urls"
WSGI_APPLICATION = "config.wsgi.application"

DATABASES = {}

# ── Internationalization ──────────────────────────────────────
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = False
USE_TZ = True


# ── Marketplace ───────────────────────────────────────────────
# Empty journal path keeps the registry in memory only.
MARKET_JOURNAL_PATH = os.environ.get("MARKET_JOURNAL_PATH", "")
MARKET_CALLER_HEADER = os.environ.get("MARKET_CALLER_HEADER", "X-Market-Caller")
MARKET_VERIFY_JOURNAL_ON_LOAD = _env_bool("MARKET_VERIFY_JOURNAL_ON_LOAD", True)

# ── Logging ───────────────────────────────────────────────────
MARKET_LOG_LEVEL = os.environ.get("MARKET_LOG_LEVEL", "INFO").upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
        },
    },
    "loggers": {
        "market": {
            "handlers": ["console"],
            "level": MARKET_LOG_LEVEL,
            "propagate": True,
        },
        "django": {
            "handlers": ["console"],
            "level": "WARNING",
        },
    },
}
