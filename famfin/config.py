"""
Runtime settings read from the environment (and an optional .env file).
"""

import os

from dotenv import load_dotenv

_project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
load_dotenv(os.path.join(_project_root, ".env"))


def _flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    def __init__(self):
        self.database_url = os.getenv("DATABASE_URL", "sqlite:///./famfin.db")
        self.secret_key = os.getenv("SECRET_KEY", "dev-secret-key-change-me")
        self.algorithm = os.getenv("ALGORITHM", "HS256")
        self.access_token_expire_minutes = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))
        self.cors_origins = [
            origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()
        ]
        self.require_session = _flag("FAMFIN_REQUIRE_SESSION")
        self.seed_demo_data = _flag("SEED_DEMO_DATA")
        self.host = os.getenv("HOST", "127.0.0.1")
        self.port = int(os.getenv("PORT", "1000"))
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()
