import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./hospital_auth.db")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    # Sessions expire a fixed time after creation unless explicitly extended
    SESSION_LIFETIME_HOURS = float(data.get("SESSION_LIFETIME_HOURS", 12))
    SESSION_REAPER_ENABLED = bool(data.get("SESSION_REAPER_ENABLED", True))
    SESSION_REAPER_INTERVAL_SECONDS = float(
        data.get("SESSION_REAPER_INTERVAL_SECONDS", 300)
    )
    BCRYPT_ROUNDS = int(data.get("BCRYPT_ROUNDS", 12))
