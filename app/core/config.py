from functools import lru_cache
from urllib.parse import urlparse

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _validate_http_url(value: str, field_name: str) -> None:
    parsed = urlparse(value)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise ValueError(f"{field_name} must be an absolute http(s) URL.")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "glampify-api"
    log_level: str = Field("INFO", env="LOG_LEVEL")
    cors_origins: list[str] = ["*"]

    # Supabase configuration (required)
    supabase_url: str = Field(..., env="SUPABASE_URL")
    supabase_service_key: str = Field(..., env="SUPABASE_SERVICE_KEY")
    supabase_anon_key: str | None = Field(None, env="SUPABASE_ANON_KEY")

    # Supabase Auth access tokens
    supabase_jwt_secret: str = Field(..., env="SUPABASE_JWT_SECRET")
    jwt_algorithm: str = "HS256"
    jwt_audience: str = "authenticated"

    # Upper bound for every PostgREST round trip
    store_timeout_seconds: float = Field(10.0, gt=0, env="STORE_TIMEOUT_SECONDS")

    @model_validator(mode="after")
    def validate_settings(self):
        if not self.supabase_url or not self.supabase_service_key:
            raise ValueError(
                "SUPABASE_URL and SUPABASE_SERVICE_KEY are required. "
                "Get these from your Supabase project settings."
            )

        _validate_http_url(self.supabase_url, "SUPABASE_URL")
        if not self.supabase_url.rstrip("/").endswith(".supabase.co"):
            raise ValueError(
                "SUPABASE_URL must be a valid Supabase project URL "
                "(e.g., https://<project>.supabase.co)"
            )

        self.log_level = self.log_level.upper()
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()
