import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent.parent


def get_env(name, default=None, cast=None, required=False):
    """
    Read a setting from the environment.
    Missing required values fail at import time so misconfigured deploys never boot.
    """
    value = os.environ.get(name)
    if value is None or value == "":
        if required:
            raise RuntimeError(f"Environment variable {name} is required.")
        return default
    if cast is bool:
        return value.strip().lower() in ("1", "true", "yes", "on")
    if cast is not None:
        return cast(value)
    return value


DEBUG = False

SECRET_KEY = get_env("SECRET_KEY", "insecure-base-secret-key")

ALLOWED_HOSTS = ["localhost", "127.0.0.1"]

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "schoolcore",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "whitenoise.middleware.WhiteNoiseMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
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
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "config.wsgi.application"

DATABASES = {
    "default": {
        "ENGINE": get_env("DB_ENGINE", "django.db.backends.sqlite3"),
        "NAME": get_env("DB_NAME", str(BASE_DIR / "db.sqlite3")),
        "USER": get_env("DB_USER", ""),
        "PASSWORD": get_env("DB_PASSWORD", ""),
        "HOST": get_env("DB_HOST", ""),
        "PORT": get_env("DB_PORT", ""),
    }
}

AUTH_USER_MODEL = "schoolcore.Account"

AUTH_PASSWORD_VALIDATORS = [
    {"NAME": "django.contrib.auth.password_validation.MinimumLengthValidator"},
]

LANGUAGE_CODE = "en-us"
TIME_ZONE = get_env("TIME_ZONE", "Asia/Kolkata")
USE_I18N = True
USE_TZ = True

STATIC_URL = "/static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

MEDIA_URL = "/media/"
MEDIA_ROOT = Path(get_env("MEDIA_ROOT", str(BASE_DIR / "media")))

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# Bulk import pipeline.
IMPORT_MAX_UPLOAD_BYTES = get_env("IMPORT_MAX_UPLOAD_BYTES", 10 * 1024 * 1024, cast=int)
IMPORT_MAX_ROWS = get_env("IMPORT_MAX_ROWS", 5000, cast=int)
IMPORT_PARSE_TIMEOUT_SECONDS = get_env("IMPORT_PARSE_TIMEOUT_SECONDS", 60, cast=int)
IMPORT_MIN_YEAR = get_env("IMPORT_MIN_YEAR", 1900, cast=int)
IMPORT_MAX_FUTURE_DAYS = get_env("IMPORT_MAX_FUTURE_DAYS", 365, cast=int)
IMPORT_DEFAULT_PASSWORD = get_env("IMPORT_DEFAULT_PASSWORD", "Welcome@123")
IMPORT_TEMP_DIR = get_env("IMPORT_TEMP_DIR", "imports/temp")
# A validating or importing batch untouched for this long is treated as abandoned.
IMPORT_STALE_BATCH_SECONDS = get_env("IMPORT_STALE_BATCH_SECONDS", 300, cast=int)

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
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
        "level": get_env("LOG_LEVEL", "INFO"),
    },
    "loggers": {
        "schoolcore": {
            "handlers": ["console"],
            "level": get_env("SCHOOLCORE_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
    },
}
