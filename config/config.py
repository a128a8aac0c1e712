import os


class Config:
    """Values shared by every environment, overridable through the environment."""

    SECRET_KEY = os.environ.get("SECRET_KEY") or "field-tracker-dev-key"

    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "field_tracker")
    DB_POOL_SIZE = int(os.environ.get("DB_POOL_SIZE", "5"))

    # Upper bound for connect, statement and lock waits.
    DB_TIMEOUT_SECONDS = int(os.environ.get("DB_TIMEOUT_SECONDS", "10"))

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    @classmethod
    def db_config(cls) -> dict:
        return {
            "host": cls.DB_HOST,
            "port": cls.DB_PORT,
            "user": cls.DB_USER,
            "password": cls.DB_PASSWORD,
            "database": cls.DB_NAME,
            "pool_size": cls.DB_POOL_SIZE,
        }
