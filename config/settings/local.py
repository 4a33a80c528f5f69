from .base import *
from .base import env

DEBUG = env.bool("DJANGO_DEBUG", False)
SECRET_KEY = env(
    "DJANGO_SECRET_KEY",
    default="hVq3y1nRk0xS9cWmZp7LdA4eTgU2bJfQo8iN6sYvE5rKw3HjC1lPxMzB0aGtDuF",
)
ALLOWED_HOSTS = env.list("DJANGO_ALLOWED_HOSTS", default=["localhost", "0.0.0.0", "127.0.0.1"])
