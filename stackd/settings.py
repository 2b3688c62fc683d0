"""
Django settings for the stackd project.

Values that differ between environments are read from environment variables
with development-friendly defaults.
"""

import os
from pathlib import Path


def _env_truthy(name, default="false"):
    return os.getenv(name, default).lower() in ("1", "true", "yes")


BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "django-insecure-stackd-development-key")

DEBUG = _env_truthy("DJANGO_DEBUG", "true")

ALLOWED_HOSTS = [h for h in os.getenv("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1").split(",") if h]


INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'rest_framework',
    'social',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'stackd.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'stackd.wsgi.application'


DATABASES = {
    'default': {
        'ENGINE': os.getenv("DJANGO_DB_ENGINE", 'django.db.backends.sqlite3'),
        'NAME': os.getenv("DJANGO_DB_NAME", str(BASE_DIR / 'db.sqlite3')),
        'USER': os.getenv("DJANGO_DB_USER", ""),
        'PASSWORD': os.getenv("DJANGO_DB_PASSWORD", ""),
        'HOST': os.getenv("DJANGO_DB_HOST", ""),
        'PORT': os.getenv("DJANGO_DB_PORT", ""),
    }
}

AUTH_USER_MODEL = 'social.User'

AUTH_PASSWORD_VALIDATORS = [
    {'NAME': 'django.contrib.auth.password_validation.UserAttributeSimilarityValidator'},
    {'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator'},
    {'NAME': 'django.contrib.auth.password_validation.CommonPasswordValidator'},
    {'NAME': 'django.contrib.auth.password_validation.NumericPasswordValidator'},
]

LANGUAGE_CODE = 'en-gb'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

STATIC_URL = 'static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'


REST_FRAMEWORK = {
    'DEFAULT_AUTHENTICATION_CLASSES': [
        'social.authentication.FirebaseAuthentication',
        'rest_framework.authentication.SessionAuthentication',
    ],
    'DEFAULT_PERMISSION_CLASSES': [
        'rest_framework.permissions.IsAuthenticatedOrReadOnly',
    ],
}


# Social graph / notification core
SOCIAL_RATE_LIMITS = {
    # 50 follows per hour
    "follow": {"limit": int(os.getenv("SOCIAL_FOLLOW_LIMIT", "50")), "window_ms": 60 * 60 * 1000},
    "block": {"limit": int(os.getenv("SOCIAL_BLOCK_LIMIT", "30")), "window_ms": 60 * 60 * 1000},
}

SOCIAL_CONTENT_STORE = os.getenv("SOCIAL_CONTENT_STORE", "social.content.HttpContentStore")
SOCIAL_CONTENT_STORE_URL = os.getenv("SOCIAL_CONTENT_STORE_URL", "")
SOCIAL_CONTENT_STORE_TIMEOUT = float(os.getenv("SOCIAL_CONTENT_STORE_TIMEOUT", "3"))

SOCIAL_NOTIFICATION_RETENTION_DAYS = int(os.getenv("SOCIAL_NOTIFICATION_RETENTION_DAYS", "30"))

# Blocking leaves existing follow edges alone unless this is switched on.
SOCIAL_BLOCK_SEVERS_FOLLOWS = _env_truthy("SOCIAL_BLOCK_SEVERS_FOLLOWS")


LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {
            'format': '%(asctime)s %(levelname)s %(name)s: %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': 'WARNING',
    },
    'loggers': {
        'social': {
            'handlers': ['console'],
            'level': os.getenv("SOCIAL_LOG_LEVEL", "INFO"),
            'propagate': False,
        },
    },
}
