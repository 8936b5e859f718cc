from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    api_base_url: str = "http://localhost:8080/api"
    health_url: str = "http://localhost:3000/health"
    request_timeout_seconds: int = 30

    refresh_interval_seconds: float = 5.0

    max_upload_size_bytes: int = 20 * 1024 * 1024
    upload_reset_delay_seconds: float = 2.0
