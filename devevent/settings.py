"""Django settings for the devevent project."""

from pathlib import Path

import environ
import structlog


# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent

# Django-environ
# Take environment variables from .env file
env = environ.Env()
environ.Env.read_env(BASE_DIR / ".env")

# --------------------------------------------------------------------------------------------------
# GENERAL
# --------------------------------------------------------------------------------------------------
# https://docs.djangoproject.com/en/dev/ref/settings/#debug
DEBUG = env.bool("DJANGO_DEBUG", False)


# --------------------------------------------------------------------------------------------------
# INTERNATIONALIZATION
# https://docs.djangoproject.com/en/dev/topics/i18n/
# --------------------------------------------------------------------------------------------------
# https://docs.djangoproject.com/en/dev/ref/settings/#language-code
LANGUAGE_CODE = env("LANGUAGE_CODE", default="en-us")
# http://en.wikipedia.org/wiki/List_of_tz_zones_by_name
TIME_ZONE = env("TIME_ZONE", default="UTC")
# https://docs.djangoproject.com/en/dev/ref/settings/#use-i18n
USE_I18N = env.bool("USE_I18N", default=True)
# https://docs.djangoproject.com/en/dev/ref/settings/#use-tz
USE_TZ = env.bool("USE_TZ", default=True)


# --------------------------------------------------------------------------------------------------
# DATABASES
# --------------------------------------------------------------------------------------------------
# https://docs.djangoproject.com/en/dev/ref/settings/#databases
DATABASES = {"default": env.db("DATABASE_URL", default=f"sqlite:///{BASE_DIR / 'db.sqlite3'}")}
DATABASES["default"]["ATOMIC_REQUESTS"] = True

# Default primary key field type
# https://docs.djangoproject.com/en/dev/ref/settings/#default-auto-field
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"


# --------------------------------------------------------------------------------------------------
# URLS
# --------------------------------------------------------------------------------------------------
# https://docs.djangoproject.com/en/dev/ref/settings/#root-urlconf
ROOT_URLCONF = "devevent.urls"

# https://docs.djangoproject.com/en/dev/ref/settings/#wsgi-application
WSGI_APPLICATION = "devevent.wsgi.application"


# --------------------------------------------------------------------------------------------------
# APPS
# --------------------------------------------------------------------------------------------------
DJANGO_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
]
THIRD_PARTY_APPS = [
    "django_structlog",
]
LOCAL_APPS = [
    "events",
    "bookings",
]
# https://docs.djangoproject.com/en/dev/ref/settings/#installed-apps
INSTALLED_APPS = LOCAL_APPS + THIRD_PARTY_APPS + DJANGO_APPS


# --------------------------------------------------------------------------------------------------
# SECURITY
# --------------------------------------------------------------------------------------------------
# https://docs.djangoproject.com/en/dev/ref/settings/#secret-key
SECRET_KEY = env("DJANGO_SECRET_KEY", default="django-insecure-devevent-local-only")
# https://docs.djangoproject.com/en/dev/ref/settings/#allowed-hosts
ALLOWED_HOSTS = env.list("DJANGO_ALLOWED_HOSTS", default=["localhost", "127.0.0.1"])
# https://docs.djangoproject.com/en/dev/ref/settings/#session-cookie-httponly
SESSION_COOKIE_HTTPONLY = True
# https://docs.djangoproject.com/en/dev/ref/settings/#session-cookie-secure
SESSION_COOKIE_SECURE = env.bool("SESSION_COOKIE_SECURE", True)
# https://docs.djangoproject.com/en/dev/ref/settings/#csrf-cookie-httponly
CSRF_COOKIE_HTTPONLY = True
# https://docs.djangoproject.com/en/dev/ref/settings/#csrf-cookie-secure
CSRF_COOKIE_SECURE = env.bool("CSRF_COOKIE_SECURE", True)
# https://docs.djangoproject.com/en/dev/ref/settings/#x-frame-options
X_FRAME_OPTIONS = "DENY"
# https://docs.djangoproject.com/en/dev/ref/settings/#std-setting-CSRF_TRUSTED_ORIGINS
CSRF_TRUSTED_ORIGINS = env.list(
    "DJANGO_CSRF_TRUSTED_ORIGINS",
    default=["http://localhost"],
)


# --------------------------------------------------------------------------------------------------
# ADMIN
# --------------------------------------------------------------------------------------------------
# Django Admin URL
ADMIN_URL = env("DJANGO_ADMIN_URL", default="admin/")

# https://docs.djangoproject.com/en/dev/ref/settings/#admins
ADMIN_NAMES = env.list("ADMIN_NAMES", default=[])
ADMIN_EMAILS = env.list("ADMIN_EMAILS", default=[])
ADMINS = list(zip(ADMIN_NAMES, ADMIN_EMAILS, strict=False))

# https://docs.djangoproject.com/en/dev/ref/settings/#managers
MANAGERS = ADMINS


# --------------------------------------------------------------------------------------------------
# MIDDLEWARE
# --------------------------------------------------------------------------------------------------
# Order matters!
# https://docs.djangoproject.com/en/dev/ref/settings/#middleware
MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
    "django_structlog.middlewares.RequestMiddleware",
]


# --------------------------------------------------------------------------------------------------
# STATIC
# --------------------------------------------------------------------------------------------------
# https://docs.djangoproject.com/en/dev/ref/settings/#static-root
STATIC_ROOT = BASE_DIR / "staticfiles"

# https://docs.djangoproject.com/en/dev/ref/settings/#static-url
STATIC_URL = env("STATIC_URL", default="static/")


# --------------------------------------------------------------------------------------------------
# MEDIA
# --------------------------------------------------------------------------------------------------
# https://docs.djangoproject.com/en/dev/ref/settings/#media-root
MEDIA_ROOT = BASE_DIR / env("MEDIA_ROOT", default="media")
MEDIA_URL = env("MEDIA_URL", default="/media/")


# --------------------------------------------------------------------------------------------------
# TEMPLATES
# --------------------------------------------------------------------------------------------------
# https://docs.djangoproject.com/en/dev/ref/settings/#templates
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


# --------------------------------------------------------------------------------------------------
# EVENTS & BOOKINGS
# --------------------------------------------------------------------------------------------------
# How many times an event save is retried when another writer took the same slug first
EVENT_SLUG_MAX_ATTEMPTS = env.int("EVENT_SLUG_MAX_ATTEMPTS", default=5)

# Where uploaded event posters are stored (relative to the default storage root)
EVENT_IMAGE_UPLOAD_DIR = env("EVENT_IMAGE_UPLOAD_DIR", default="events")
EVENT_IMAGE_MAX_BYTES = env.int("EVENT_IMAGE_MAX_BYTES", default=5 * 1024 * 1024)

# Hash e-mail addresses before they reach the logs
LOG_EMAIL_HASH = env.bool("LOG_EMAIL_HASH", default=True)


# --------------------------------------------------------------------------------------------------
# LOGGING
# --------------------------------------------------------------------------------------------------
# https://docs.djangoproject.com/en/dev/ref/settings/#logging
# https://docs.djangoproject.com/en/dev/topics/logging

# Ensure log directory exists
log_dir = Path(env("LOG_DIR", default=BASE_DIR / "logs"))
log_dir.mkdir(parents=True, exist_ok=True)

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "colored_console": {
            "()": structlog.stdlib.ProcessorFormatter,
            "processor": structlog.dev.ConsoleRenderer(colors=True),
        },
        "json_formatter": {
            "()": structlog.stdlib.ProcessorFormatter,
            "processor": structlog.processors.JSONRenderer(),
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "colored_console",
        },
        "json_file": {
            "class": "logging.handlers.TimedRotatingFileHandler",
            "filename": log_dir / "django.log",
            "formatter": "json_formatter",
            "when": "midnight",
            "backupCount": 30,
        },
        "error_file": {
            "class": "logging.handlers.TimedRotatingFileHandler",
            "filename": log_dir / "error.log",
            "formatter": "json_formatter",
            "when": "midnight",
            "backupCount": 90,
            "level": "ERROR",
        },
        "analytics_file": {
            "class": "logging.handlers.TimedRotatingFileHandler",
            "filename": log_dir / "analytics.log",
            "formatter": "json_formatter",
            "when": "midnight",
            "backupCount": 90,
        },
    },
    "root": {
        "handlers": ["console", "json_file"],
        "level": "WARNING",
    },
    "loggers": {
        "django": {
            "handlers": ["console", "json_file"],
            "level": "WARNING",
            "propagate": False,
        },
        "django.request": {
            "handlers": ["error_file"],
            "level": "ERROR",
            "propagate": True,
        },
        "django.db.backends": {
            "level": env("DJANGO_DATABASE_LOG_LEVEL", default="ERROR"),
            "handlers": ["error_file"],
            "propagate": False,
        },
        "django_structlog": {
            "level": env("REQUEST_LOG_LEVEL", default="WARNING"),
            "handlers": ["console", "json_file"],
            "propagate": False,
        },
        "devevent": {
            "level": env("LOG_LEVEL", default="INFO"),
            "handlers": ["console", "json_file", "error_file"],
            "propagate": False,
        },
        "events": {
            "level": env("LOG_LEVEL", default="INFO"),
            "handlers": ["console", "json_file", "error_file"],
            "propagate": False,
        },
        "bookings": {
            "level": env("LOG_LEVEL", default="INFO"),
            "handlers": ["console", "json_file", "error_file"],
            "propagate": False,
        },
        "analytics": {
            "level": "INFO",
            "handlers": ["analytics_file"],
            "propagate": False,
        },
    },
}

# Structlog configuration
processors = []

# Add CallsiteParameterAdder in debug mode
if DEBUG:
    processors.append(
        # Add source code location information (file, function, line) where the log was called
        structlog.processors.CallsiteParameterAdder(
            parameters=(
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ),
        ),
    )

processors.extend(
    [
        # Add context variables from the current context
        structlog.contextvars.merge_contextvars,
        # Filter logs according to their level
        structlog.stdlib.filter_by_level,
        # Add a timestamp in ISO 8601 format
        structlog.processors.TimeStamper(fmt="iso"),
        # Add the logger name
        structlog.stdlib.add_logger_name,
        # Add the log level
        structlog.stdlib.add_log_level,
        # Replace positional arguments with properly formatted strings
        structlog.stdlib.PositionalArgumentsFormatter(),
        # Add stack information for warnings and above
        structlog.processors.StackInfoRenderer(),
        # Format exception info if present
        structlog.processors.format_exc_info,
        # If some value is in bytes, decode it to unicode
        structlog.processors.UnicodeDecoder(),
        # Prepare the event dict for the formatter
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ],
)

structlog.configure(
    processors=processors,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)
