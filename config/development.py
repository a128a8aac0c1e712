import os

from config.config import Config

SECRET_KEY = Config.SECRET_KEY

DB_CONFIG = Config.db_config()
DB_TIMEOUT_SECONDS = Config.DB_TIMEOUT_SECONDS

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo data on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
