# ruff: noqa: ERA001
"""
Base settings for the Yapium rewards backend.

These settings are suitable for production.
Local development settings should override these in 'local.py'.
"""

from pathlib import Path

import environ
from pydantic_settings import BaseSettings, SettingsConfigDict
from config.log import LOGGING

# Project structure
BASE_DIR = Path(__file__).resolve(strict=True).parent.parent.parent
APPS_DIR = BASE_DIR

# Environment variables setup
env = environ.Env()
READ_DOT_ENV_FILE = env.bool("DJANGO_READ_DOT_ENV_FILE", default=False)
if READ_DOT_ENV_FILE:
    env.read_env(str(BASE_DIR / ".env"))

# GENERAL
# ------------------------------------------------------------------------------
DEBUG = env.bool("DJANGO_DEBUG", False)
TIME_ZONE = "UTC"
LANGUAGE_CODE = "en-us"
USE_I18N = False
USE_TZ = True
APP_VERSION = env("APP_VERSION", default="0.1.0")
ENVIRONMENT = env("DJANGO_ENV", default="dev")

# URLS & APPLICATIONS
# ------------------------------------------------------------------------------
ROOT_URLCONF = "config.urls"
ASGI_APPLICATION = "config.asgi.application"
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# DATABASES
# ------------------------------------------------------------------------------
# Every estimate is recomputed per request; nothing is stored.
DATABASES: dict = {}

# APPS
# ------------------------------------------------------------------------------
DJANGO_APPS: list[str] = []
THIRD_PARTY_APPS: list[str] = []
LOCAL_APPS = [
    "apps.core.apps.CoreConfig",
    "apps.leaderboards.apps.LeaderboardsConfig",
    "apps.rewards.apps.RewardsConfig",
    "apps.users.apps.UsersConfig",
    "apps.proxy.apps.ProxyConfig",
]
INSTALLED_APPS = DJANGO_APPS + THIRD_PARTY_APPS + LOCAL_APPS

# MIDDLEWARE
# ------------------------------------------------------------------------------
MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

# SECURITY
# ------------------------------------------------------------------------------
CSRF_COOKIE_HTTPONLY = True
X_FRAME_OPTIONS = "DENY"
CORS_ALLOWED_ORIGINS = env.list("CORS_ALLOWED_ORIGINS", default=["*"])

# UPSTREAM API CONFIG
# ------------------------------------------------------------------------------


class UpstreamApiSettings(BaseSettings):
    BASE_URL: str = "https://gomtu.xyz/api"
    TIMEOUT_S: float = 30.0

    model_config = SettingsConfigDict(env_prefix="UPSTREAM_", frozen=True)


UPSTREAM_API_CONFIG = UpstreamApiSettings()  # ⇐ attribute-style access

# REWARDS
# ------------------------------------------------------------------------------
# Optional JSON file with extra ProjectConfig entries (list of objects).
REWARD_PROJECTS_FILE = env("REWARD_PROJECTS_FILE", default=None)

SECRET_KEY = env("DJANGO_SECRET_KEY", default=None)

APPEND_SLASH = False
