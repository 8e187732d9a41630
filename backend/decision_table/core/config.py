"""
Configuration management using Pydantic Settings
"""
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# config.py is at: backend/decision_table/core/config.py
# Project root is: backend/decision_table/core/../../../
_current_file = Path(__file__).resolve()
_backend_dir = _current_file.parent.parent.parent
_project_root = _backend_dir.parent
ENV_FILE = _project_root / ".env"
# Fallback: try in backend/ directory if not found in project root
if not ENV_FILE.exists():
    ENV_FILE = _backend_dir / ".env"
if ENV_FILE.exists():
    load_dotenv(ENV_FILE, override=False)


class Settings(BaseSettings):
    """Application settings"""

    # Application
    app_name: str = "decision-table-service"
    app_env: str = Field(default="development", description="Application environment")
    api_host: str = Field(default="127.0.0.1", description="API host")
    api_port: int = Field(default=3030, ge=1, le=65535, description="API port")
    max_body_bytes: int = Field(
        default=16 * 1024,
        ge=1,
        description="Maximum accepted request body size in bytes"
    )
    enable_metrics: bool = Field(default=True, description="Expose Prometheus /metrics endpoint")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="text",
        description="Log format: 'json' for structured logging, 'text' for plain text"
    )
    log_module_levels: Optional[str] = Field(
        default=None,
        description='Module-specific log levels (JSON string, e.g., {"decision_table.api": "DEBUG"})'
    )
    log_uvicorn_access: bool = Field(default=False, description="Enable Uvicorn access logging")
    log_file_enabled: bool = Field(default=False, description="Enable file logging")
    log_file_path: str = Field(
        default="logs/decision_table.log",
        description="Path to log file (relative to project root)"
    )
    log_file_retention: int = Field(
        default=7,
        ge=1,
        description="Number of days to keep log files"
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept level names in any case"""
        level = v.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("log_format")
    @classmethod
    def normalize_log_format(cls, v: str) -> str:
        fmt = v.strip().lower()
        if fmt not in ("json", "text"):
            raise ValueError(f"Unknown log format: {v}")
        return fmt

    @property
    def project_root(self) -> Path:
        return _project_root

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE) if ENV_FILE.exists() else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_ignore_empty=True
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
