"""
Django settings for the Elephant Party site.

This site keeps no database of its own: every event, ticket and attendee is
read from and written to the ticketing backend over HTTP. Sessions live in
the cache and only carry the backend's admin cookie.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


def _load_secrets():
    """
    On Elastic Beanstalk the secret key and backend URL come from AWS
    Secrets Manager; locally everything is plain environment variables.
    """
    secret_name = os.getenv("AWS_SECRET_NAME")
    if ENVIRONMENT not in ("production", "development") or not secret_name:
        return {}
    from config.secrets import get_secret

    return get_secret(secret_name, region_name=os.getenv("AWS_REGION", "us-east-1"))


SECRETS = _load_secrets()

SECRET_KEY = SECRETS.get(
    "DJANGO_SECRET_KEY",
    os.getenv("DJANGO_SECRET_KEY", "django-insecure-local-development-key"),
)

DEBUG = os.getenv("DEBUG", "True" if ENVIRONMENT == "local" else "False") == "True"

ALLOWED_HOSTS = [
    h.strip()
    for h in os.getenv("ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",")
    if h.strip()
]


# Application definition

INSTALLED_APPS = [
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "backend",
    "accounts",
    "elephant",
    "events",
    "tickets",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
    "config.middleware.auth_redirect_middleware.AuthRedirectMiddleware",
]

ROOT_URLCONF = "config.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.messages.context_processors.messages",
                "config.context_processors.site_navigation",
                "config.context_processors.admin_session",
            ],
        },
    },
]

WSGI_APPLICATION = "config.wsgi.application"

# No models live here; the backend API is the only data store.
DATABASES = {}

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "elephant-sessions",
    }
}

SESSION_ENGINE = "django.contrib.sessions.backends.cache"
SESSION_COOKIE_HTTPONLY = True
SESSION_COOKIE_SECURE = ENVIRONMENT == "production"
CSRF_COOKIE_SECURE = ENVIRONMENT == "production"

MESSAGE_STORAGE = "django.contrib.messages.storage.session.SessionStorage"


# Backend API

BACKEND_API_URL = SECRETS.get(
    "BACKEND_API_URL", os.getenv("BACKEND_API_URL", "http://localhost:3001/api/v1")
)
BACKEND_TIMEOUT_SECONDS = float(os.getenv("BACKEND_TIMEOUT_SECONDS", "15"))

LOGIN_URL = "accounts:login"

# How long the "Redirecting to login..." page stays up after a 401.
AUTH_REDIRECT_DELAY_SECONDS = float(os.getenv("AUTH_REDIRECT_DELAY_SECONDS", "1.5"))

EVENTS_PAGE_SIZE = int(os.getenv("EVENTS_PAGE_SIZE", "6"))

PODCAST_URL = "https://soundcloud.com/thatelephantparty"


# Internationalization

LANGUAGE_CODE = "en-us"
TIME_ZONE = os.getenv("TIME_ZONE", "Asia/Manila")
USE_I18N = True
USE_TZ = True


# Static files (CSS, JavaScript, Images)

STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

DATA_UPLOAD_MAX_MEMORY_SIZE = 10 * 1024 * 1024
FILE_UPLOAD_MAX_MEMORY_SIZE = 10 * 1024 * 1024


# Logging

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {
            "format": "{asctime} {levelname} {name}: {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "simple",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": os.getenv("LOG_LEVEL", "INFO"),
    },
    "loggers": {
        "django": {
            "handlers": ["console"],
            "level": os.getenv("DJANGO_LOG_LEVEL", "WARNING"),
            "propagate": False,
        },
    },
}
