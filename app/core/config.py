from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    # ─────────── APP ───────────
    app_name: str = "Event Matchmaking Registration"
    environment: str = "dev"
    log_level: str = "INFO"

    # ─────────── API ───────────
    api_prefix: str = "/api/v1"
    request_id_header: str = "X-Request-Id"

    # ─────────── DATABASE ───────────
    database_url: str

    # ─────────── JWT / AUTH ───────────
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    jwt_access_token_minutes: int = 1440  # 24 hours, admins
    participant_token_minutes: int = 60 * 24 * 7  # 7 days

    # ─────────── RATE LIMITING ───────────
    rate_limit_enabled: bool = True
    # peers allowed to set X-Forwarded-For / X-Real-IP (e.g. the load balancer)
    trusted_proxies: List[str] = []

    # ─────────── SEED ───────────
    seed_admin_email: str = "admin@example.com"
    seed_admin_password: str = "change-me"
    seed_admin_name: str = "Event Admin"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
