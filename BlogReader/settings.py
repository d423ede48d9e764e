"""
Django settings for BlogReader.

Deployment values come from environment variables; everything else has a
development default.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def env_bool(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "django-insecure-blogreader-dev-key")

DEBUG = env_bool("DJANGO_DEBUG", True)

ALLOWED_HOSTS = [h for h in os.environ.get("DJANGO_ALLOWED_HOSTS", "").split(",") if h]

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.staticfiles",
    "blogs",
]

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {"context_processors": []},
    }
]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
    }
}

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "blogreader",
    }
}

STATIC_URL = "static/"
USE_TZ = True
TIME_ZONE = "UTC"

# Celery
CELERY_BROKER_URL = os.environ.get("CELERY_BROKER_URL", "redis://localhost:6379/0")
CELERY_RESULT_BACKEND = os.environ.get("CELERY_RESULT_BACKEND", "redis://localhost:6379/1")
CELERY_TASK_SERIALIZER = "json"
CELERY_RESULT_SERIALIZER = "json"
CELERY_ACCEPT_CONTENT = ["json"]
CELERY_TIMEZONE = TIME_ZONE

# Blogs
BLOGS_DIR = Path(os.environ.get("BLOGS_DIR", BASE_DIR / "blogs-content"))
BLOGS_CATEGORIES = [
    "artificial-intelligence",
    "ecosystems-and-partners",
    "high-performance-computing",
    "software-tools-optimization",
]
# Local mode serves article media from /blogs/ on this site; otherwise
# media URLs point at the published repository
BLOGS_LOCAL_MODE = env_bool("BLOGS_LOCAL_MODE", DEBUG)
BLOGS_GITHUB_REPO = os.environ.get("BLOGS_GITHUB_REPO", "ROCm/rocm-blogs")
BLOGS_GITHUB_BRANCH = os.environ.get("BLOGS_GITHUB_BRANCH", "release")
BLOGS_RAW_BASE = "https://raw.githubusercontent.com"
BLOGS_SANITIZE_HTML = True
BLOGS_CACHE_TIMEOUT = 3600

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{levelname} {asctime} {name} {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "WARNING",
    },
    "loggers": {
        "blogs": {
            "handlers": ["console"],
            "level": os.environ.get("BLOGS_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
    },
}
