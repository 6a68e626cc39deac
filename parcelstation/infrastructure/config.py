from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="PARCELSTATION_", env_file=".env", extra="ignore")

    database_url: str = "sqlite+pysqlite:///:memory:"
    pickup_code_max_attempts: int = 10
    seed_default_layout: bool = True
    log_level: str = "INFO"
    openapi_path: Path = Path(__file__).resolve().parents[1] / "openapi/openapi.yaml"


settings = Settings()
