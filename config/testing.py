import os

from .config import db_config_from_env

SECRET_KEY = "test-secret"

DB_CONFIG = db_config_from_env(default_password="12345")

# Sequential scoring keeps test runs deterministic and easy to debug.
SCORING = {
    "PUNCTUALITY_MODE": "fixed",
    "ON_TIME_GRACE_MINUTES": 15,
    "RETURN_FLEXIBILITY_DAYS": 3,
    "MAX_WORKERS": 1,
    "TOP_N": 3,
}

DEBUG = False
TESTING = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
