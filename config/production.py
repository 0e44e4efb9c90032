from .config import DB_CONFIG as _DB_CONFIG, Config, env_flag

DB_CONFIG = dict(_DB_CONFIG)

ADMIN_PIN = Config.ADMIN_PIN
BUSINESS_UTC_OFFSET_HOURS = Config.BUSINESS_UTC_OFFSET_HOURS
CORS_ORIGIN = Config.CORS_ORIGIN

DEBUG = False
LOG_LEVEL = Config.LOG_LEVEL

# Production schemas are applied with scripts/init_db.py unless explicitly enabled
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "0")
