"""
Django settings for ev_storefront project.

Values come from the environment (optionally a .env file at the repo root).
"""
import os
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(dotenv_path=BASE_DIR / ".env")


def _get_env(*keys, default=None):
    for k in keys:
        v = os.getenv(k)
        if v is not None and str(v).strip() != "":
            return v.strip()
    return default


def _get_int(*keys, default=None):
    v = _get_env(*keys, default=None)
    if v is None:
        return default
    return int(v)


def _get_float(*keys, default=None):
    v = _get_env(*keys, default=None)
    if v is None:
        return default
    return float(v)


def _get_bool(*keys, default=False):
    v = _get_env(*keys, default=None)
    if v is None:
        return default
    return v.lower() in ("1", "true", "yes", "on")


SECRET_KEY = _get_env("DJANGO_SECRET_KEY", default="dev-secret-change")
DEBUG = _get_bool("DJANGO_DEBUG", default=True)
ALLOWED_HOSTS = (_get_env("DJANGO_ALLOWED_HOSTS", default="*") or "*").split(",")

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "django.contrib.sessions",
    "django.contrib.staticfiles",
    "rest_framework",
    "drf_spectacular",
    "channels",
    "common",
    "accounts",
    "cart",
    "product",
    "order",
    "checkout",
    "storefront",
    "dashboard",
    "notifications",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "ev_storefront.middleware.session_token_middleware.SessionTokenMiddleware",
]

ROOT_URLCONF = "ev_storefront.urls"
WSGI_APPLICATION = "ev_storefront.wsgi.application"
ASGI_APPLICATION = "ev_storefront.asgi.application"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {"context_processors": ["django.template.context_processors.request"]},
    },
]

# The commerce backend owns all data; the local database only backs Django
# internals and is never queried by the storefront itself.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": _get_env("DB_PATH", default=str(BASE_DIR / "db.sqlite3")),
    }
}

SESSION_ENGINE = "django.contrib.sessions.backends.signed_cookies"
SESSION_COOKIE_HTTPONLY = True
# SessionTokenMiddleware turns this cookie into a bearer header and DRF runs
# without SessionAuthentication, so no CSRF check applies to API POSTs.
# SameSite=Lax is what keeps cross-site forms from riding the session; do
# not loosen it to "None".
SESSION_COOKIE_SAMESITE = "Lax"

LANGUAGE_CODE = "en-us"
TIME_ZONE = _get_env("TIME_ZONE", default="Asia/Manila")
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": ["rest_framework.permissions.AllowAny"],
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
        "rest_framework.parsers.FormParser",
        "rest_framework.parsers.MultiPartParser",
    ],
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
    "UNAUTHENTICATED_USER": None,
}

SPECTACULAR_SETTINGS = {
    "TITLE": "EV Storefront API",
    "DESCRIPTION": "Storefront, checkout and admin endpoints in front of the commerce backend",
    "VERSION": "0.1.0",
}

CHANNEL_LAYERS = {
    "default": {"BACKEND": "channels.layers.InMemoryChannelLayer"},
}

STOREFRONT = {
    "BACKEND_API_URL": _get_env(
        "LARAVEL_API_URL", "NEXT_PUBLIC_LARAVEL_API_URL", default="http://localhost:8000/api"
    ),
    "SESSION_STORAGE_KEY": _get_env("STOREFRONT_SESSION_KEY", default="session"),
    "REQUEST_TIMEOUT": _get_float("STOREFRONT_REQUEST_TIMEOUT", default=None),
    "CLEAR_RETRY_ATTEMPTS": _get_int("STOREFRONT_CLEAR_RETRY_ATTEMPTS", default=3),
    "CLEAR_RETRY_DELAY": _get_float("STOREFRONT_CLEAR_RETRY_DELAY", default=1.0),
    "ADMIN_CHAT_POLL_SECONDS": _get_int("STOREFRONT_ADMIN_CHAT_POLL_SECONDS", default=15),
    "HERO_AUTOPLAY_SECONDS": _get_int("STOREFRONT_HERO_AUTOPLAY_SECONDS", default=4),
}

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {"format": "%(asctime)s | %(levelname)s | %(name)s | %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "default"},
    },
    "root": {
        "handlers": ["console"],
        "level": _get_env("LOG_LEVEL", default="INFO"),
    },
}
