from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    # App
    app_name: str = "Hotel Access"
    debug: bool = False

    # CORS
    cors_origins: str = "http://localhost:5173"

    @property
    def cors_origins_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # Sessions (tokens are minted by the auth service, verified here)
    secret_key: str = "dev-secret-key-change-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 30

    # Route guard targets
    login_path: str = "/login"
    unauthorized_path: str = "/unauthorized"
    landing_path: str = "/dashboard"

    # Optional YAML access policy replacing the compiled-in table
    policy_file: Optional[str] = None

    # Logging
    log_level: str = "INFO"
    log_dir: str = "/var/log/hotel-access"
    log_to_file: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="HOTEL_ACCESS_",
        case_sensitive=False,
        extra="ignore"
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
