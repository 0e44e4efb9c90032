import os

from .config import DB_CONFIG as _DB_CONFIG, Config, env_flag

DB_CONFIG = dict(_DB_CONFIG)

ADMIN_PIN = Config.ADMIN_PIN
BUSINESS_UTC_OFFSET_HOURS = Config.BUSINESS_UTC_OFFSET_HOURS
CORS_ORIGIN = Config.CORS_ORIGIN

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG").upper()

# Apply schema.sql on startup (idempotent: CREATE TABLE IF NOT EXISTS)
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "1")
