from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).parent.parent
ENV_FILE_PATH = PROJECT_ROOT / ".env"


class DefaultSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=[".env", str(ENV_FILE_PATH)],
        extra="ignore",
        frozen=True,
        env_nested_delimiter="__",
    )


class OpenSearchSettings(DefaultSettings):
    """OpenSearch settings"""
    model_config = SettingsConfigDict(
        env_file=[".env", str(ENV_FILE_PATH)],
        env_prefix="OPENSEARCH__",
        extra="ignore",
        frozen=True,
        case_sensitive=False,
    )

    host: str = "http://localhost:9200"
    # Managed-platform service instance that carries the engine url
    service_name: str = "eservice"
    bulk_chunk_size: int = 500


class S3Settings(DefaultSettings):
    """S3 settings for reading data.yaml and csv files from a bucket."""
    model_config = SettingsConfigDict(
        env_file=[".env", str(ENV_FILE_PATH)],
        env_prefix="S3__",
        extra="ignore",
        frozen=True,
        case_sensitive=False,
    )

    service_name: str = "s3-sb-ed-college-choice"
    region: str = "us-east-1"
    access_key_variable: str = "s3_access_key"
    secret_key_variable: str = "s3_secret_key"


class Settings(DefaultSettings):
    app_version: str = "0.1.0"
    debug: bool = False
    service_name: str = "data-magic"

    # Names of process environment variables, not their values
    environment_variable: str = "RACK_ENV"
    platform_variable: str = "VCAP_APPLICATION"

    data_path: str = "./sample-data"
    page_size: int = 20
    config_index: str = "config"
    reindex_on_startup: bool = True

    opensearch: OpenSearchSettings = Field(default_factory=OpenSearchSettings)
    s3: S3Settings = Field(default_factory=S3Settings)

    @field_validator("data_path", mode="before")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        if isinstance(value, str) and len(value) > 1:
            return value.rstrip("/")
        return value


def get_settings() -> Settings:
    return Settings()


@lru_cache
def get_cached_settings() -> Settings:
    """Settings shared by the web application for the process lifetime."""
    return get_settings()
