"""
Django settings for clubsync project.

All deployment-specific values come from environment variables, optionally
loaded from a `.env` file at the project root.
"""

import os
from pathlib import Path

import dj_database_url
from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent

ENV_FILE = Path(os.getenv("CLUBSYNC_ENV_FILE", BASE_DIR / ".env"))
load_dotenv(ENV_FILE)


def env_flag(name, default=False):
    """Read a true/false style environment variable."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


SECRET_KEY = os.getenv("SECRET_KEY", "django-insecure-clubsync-development-key")

DEBUG = env_flag("DEBUG")

ALLOWED_HOSTS = [h.strip() for h in os.getenv("ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",") if h.strip()]


INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "easyverein",
    "calendars",
    "events",
    "members",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "clubsync.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [BASE_DIR / "templates"],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "clubsync.wsgi.application"


# Database
# DATABASE_URL wins; otherwise the DB_* variables describe a MySQL server,
# and without either a local SQLite file is used.

if os.getenv("DATABASE_URL"):
    DATABASES = {"default": dj_database_url.config(conn_max_age=600)}
elif os.getenv("DB_HOST"):
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.mysql",
            "HOST": os.getenv("DB_HOST"),
            "PORT": os.getenv("DB_PORT", "3306"),
            "NAME": os.getenv("DB_NAME", ""),
            "USER": os.getenv("DB_USER", ""),
            "PASSWORD": os.getenv("DB_PASSWORD", ""),
            "OPTIONS": {"charset": "utf8mb4"},
        }
    }
else:
    DATABASES = {"default": dj_database_url.parse(f"sqlite:///{BASE_DIR / 'db.sqlite3'}")}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# Prepended to every synced table name so several deployments can share one database
TABLE_PREFIX = os.getenv("TABLE_PREFIX", "")


# Internationalization

LANGUAGE_CODE = "en-us"

TIME_ZONE = os.getenv("TIME_ZONE", "Europe/Berlin")

USE_I18N = True

USE_TZ = True

# SQLite and MySQL store naive wall-clock values; write them in local time
# rather than UTC. PostgreSQL keeps time zones natively and rejects this option.
NATIVE_TZ_ENGINES = ("django.db.backends.postgresql", "django.contrib.gis.db.backends.postgis")
if not DATABASES["default"]["ENGINE"].startswith(NATIVE_TZ_ENGINES):
    DATABASES["default"]["TIME_ZONE"] = TIME_ZONE


STATIC_URL = "static/"


# easyVerein API

EASYVEREIN_API_URL = os.getenv("EASYVEREIN_API_URL", "https://easyverein.com/api/v2.0")
EASYVEREIN_API_TOKEN = os.getenv("API_TOKEN", "")
EASYVEREIN_PAGE_DELAY = float(os.getenv("EASYVEREIN_PAGE_DELAY", "1.0"))
EASYVEREIN_CALENDAR_IDS = [int(c) for c in os.getenv("CALENDAR_IDS", "").split(",") if c.strip()]


# Trigger form (HTTP basic auth); the form is disabled while either is unset

WEB_USERNAME = os.getenv("WEB_USERNAME", "")
WEB_PASSWORD = os.getenv("WEB_PASSWORD", "")


LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "simple",
        },
    },
    "loggers": {
        app: {
            "handlers": ["console"],
            "level": "DEBUG" if DEBUG else "INFO",
            "propagate": False,
        }
        for app in ("easyverein", "calendars", "events", "members", "clubsync")
    },
}
