from .base import *

DEBUG = False
SECRET_KEY = "test-only-secret-key"
ALLOWED_HOSTS = ["testserver", "localhost"]

UPSTREAM_API_CONFIG = UpstreamApiSettings(BASE_URL="https://upstream.test/api", TIMEOUT_S=5.0)
REWARD_PROJECTS_FILE = None
