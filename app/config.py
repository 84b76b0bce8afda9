"""
Configuration management using Pydantic Settings
"""
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Project root is two levels above this file (app/config.py -> app/ -> root)
PROJECT_ROOT = Path(__file__).resolve().parent.parent
ENV_FILE = PROJECT_ROOT / ".env"
if ENV_FILE.exists():
    load_dotenv(ENV_FILE)


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(extra="ignore")

    # Application
    app_name: str = "Khaudum Conservancies"
    app_env: str = Field(default="development", description="Application environment")
    log_level: str = Field(default="INFO", description="Logging level")
    host: str = Field(default="0.0.0.0", description="Bind address for the development server")
    port: int = Field(default=3000, ge=1, le=65535, description="Bind port for the development server")

    # Storage
    content_path: Path = Field(
        default=PROJECT_ROOT / "content.json",
        description="JSON document holding all page content",
    )
    public_dir: Path = Field(
        default=PROJECT_ROOT / "public",
        description="Directory served at '/' (uploads/ and downloads/ live here)",
    )

    # Sessions & admin account
    session_secret: str = Field(
        default="change-me-in-production",
        description="Secret used to sign the session cookie",
    )
    admin_username: str = Field(default="admin", description="Admin console username")
    admin_password_hash: Optional[str] = Field(
        default=None,
        description="bcrypt hash of the admin password; login is disabled when unset",
    )

    # Content
    placeholder_image: str = Field(
        default="https://via.placeholder.com/400x200",
        description="Image used for news articles saved without an upload",
    )

    @property
    def uploads_dir(self) -> Path:
        return self.public_dir / "uploads"

    @property
    def downloads_dir(self) -> Path:
        return self.public_dir / "downloads"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
