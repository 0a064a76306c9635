import os

# Defaults match the store's posted hours; each can be overridden by env.
_STORE_TIMING_ENV = {
    "morningStart": ("STORE_MORNING_START", "09:30"),
    "morningEnd": ("STORE_MORNING_END", "13:40"),
    "lunchStart": ("STORE_LUNCH_START", "13:40"),
    "lunchEnd": ("STORE_LUNCH_END", "15:30"),
    "eveningStart": ("STORE_EVENING_START", "15:30"),
    "eveningEnd": ("STORE_EVENING_END", "21:30"),
}


def store_timings_from_env() -> dict:
    return {key: os.environ.get(env, default) for key, (env, default) in _STORE_TIMING_ENV.items()}


def db_config_from_env(*, default_password: str = "") -> dict:
    return {
        "host": os.environ.get("DB_HOST", "localhost"),
        "port": int(os.environ.get("DB_PORT", "3306")),
        "user": os.environ.get("DB_USER", "root"),
        "password": os.environ.get("DB_PASSWORD", default_password),
        "database": os.environ.get("DB_NAME", "staff_attendance"),
    }


class Config:
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    # Validated by StoreTimings.from_mapping at startup.
    GRACE_MINUTES = os.environ.get("GRACE_MINUTES", "0")
    AUTO_INIT_DB = bool(int(os.environ.get("AUTO_INIT_DB", "0")))
