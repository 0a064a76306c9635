from .config import db_config_from_env

SECRET_KEY = "test-secret"

DB_CONFIG = db_config_from_env()

STORE_TIMINGS = {
    "morningStart": "09:30",
    "morningEnd": "13:40",
    "lunchStart": "13:40",
    "lunchEnd": "15:30",
    "eveningStart": "15:30",
    "eveningEnd": "21:30",
}
GRACE_MINUTES = 0

LOG_LEVEL = "WARNING"
DEBUG = False
TESTING = True

AUTO_INIT_DB = False
