from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_env: str = "development"
    database_url: str = "sqlite:///./numeromap.db"
    # Create tables on startup (no migrations tool in this deployment)
    auto_create_tables: bool = True

    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Trusted callers (e.g. the web front end's server side) authenticate with
    # this key and pass the identity service's user id in X-User-Id.
    internal_api_key: str | None = None
    allow_insecure_dev_auth: bool = False

    cors_origins_raw: str = ""
    rate_limit_enabled: bool = True

    report_signing_secret: str | None = None
    report_link_ttl_minutes: int = 10
    report_author: str = "NumeroMap"

    def cors_origins(self) -> list[str]:
        raw = self.cors_origins_raw.strip()
        if not raw:
            return []
        return [item.strip() for item in raw.split(",") if item.strip()]

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
