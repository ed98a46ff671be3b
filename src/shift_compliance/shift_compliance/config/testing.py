import os

from .base import *  # noqa: F401,F403

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True

QR_TOKEN = "TEST_QR_TOKEN"
GEOCODER_URL = ""

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
