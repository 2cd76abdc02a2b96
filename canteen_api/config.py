"""
config.py – Settings read from the environment (.env loaded by python-dotenv).
"""
import os

from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings:
    def __init__(self) -> None:
        self.jwt_secret    = os.getenv("JWT_SECRET", "dev-secret-change-me")
        self.jwt_algorithm = os.getenv("JWT_ALGORITHM", "HS256")
        self.access_token_expire_minutes = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "720"))
        self.bcrypt_rounds = int(os.getenv("BCRYPT_ROUNDS", "10"))

        # Default: in-memory SQLite, data lives as long as the process
        self.database_url  = os.getenv("DATABASE_URL", "sqlite://")
        self.seed_demo_data = _flag("SEED_DEMO_DATA", "1")

        self.cors_origins = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
        self.log_level    = os.getenv("LOG_LEVEL", "INFO").upper()
        self.notify_send_timeout = float(os.getenv("NOTIFY_SEND_TIMEOUT", "2.0"))


settings = Settings()
