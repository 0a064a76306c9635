import os

from .config import Config, db_config_from_env, store_timings_from_env

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = db_config_from_env()

STORE_TIMINGS = store_timings_from_env()
GRACE_MINUTES = Config.GRACE_MINUTES

LOG_LEVEL = Config.LOG_LEVEL
DEBUG = False

AUTO_INIT_DB = Config.AUTO_INIT_DB
