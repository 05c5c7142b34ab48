"""Configuration loader for the kgsync client layer."""

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field


class AppInfo(BaseModel):
    """Application metadata."""

    name: str = "Knowledge Graph Dashboard"
    version: str = "1.0.0"


class ApiConfig(BaseModel):
    """Control-plane API connection settings."""

    base_url: str = "http://localhost:8000"
    timeout_sec: float = 30.0


class SyncConfig(BaseModel):
    """Collection enumeration settings."""

    page_size: int = 50  # backend max page size
    default_order: int = -1


class UploadConfig(BaseModel):
    """Direct-to-storage upload settings."""

    resource_id_field: str = "x-amz-meta-document-id"
    allowed_extensions: list[str] = Field(
        default_factory=lambda: ["pdf", "csv", "json", "txt"]
    )


class StorageConfig(BaseModel):
    """Local persistence settings."""

    sqlite_path: str = "./db/app.db"
    preferences_key: str = "dashboard-config"


class AppConfig(BaseModel):
    """Root application configuration."""

    app: AppInfo = Field(default_factory=AppInfo)
    api: ApiConfig = Field(default_factory=ApiConfig)
    sync: SyncConfig = Field(default_factory=SyncConfig)
    upload: UploadConfig = Field(default_factory=UploadConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)

    # API key loaded from environment
    api_key: str | None = None


def load_config(config_path: str | Path = "config.yaml") -> AppConfig:
    """Load configuration from YAML file and environment variables.

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        Fully populated AppConfig instance.
    """
    load_dotenv()

    yaml_data: dict = {}
    config_file = Path(config_path)
    if config_file.exists():
        with open(config_file) as f:
            yaml_data = yaml.safe_load(f) or {}

    config = AppConfig(**yaml_data)

    config.api_key = os.getenv("WHYHOW_API_KEY")
    api_url = os.getenv("WHYHOW_API_URL")
    if api_url:
        config.api.base_url = api_url

    return config
