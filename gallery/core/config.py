"""Application configuration using Pydantic Settings."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ADMIN_PASSWORD = "changeme"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    debug: bool = False

    cors_origins: list[str] = ["*"]

    # Database
    database_url: str = "sqlite+aiosqlite:///./gallery.db"

    # Storage
    uploads_dir: Path = Path("./uploads")
    thumbs_dirname: str = "thumbs"
    public_dir: Path | None = None

    # Thumbnails
    thumbnail_width: int = 360
    thumbnail_height: int = 240
    thumbnail_quality: int = 75

    # Admin fallback identity (not a row in the users table)
    admin_user: str = "admin"
    admin_password: str = DEFAULT_ADMIN_PASSWORD

    # Sessions
    session_cookie_name: str = "gallery_session"
    session_max_age_minutes: int = 24 * 60

    # Policy
    allow_anonymous_uploads: bool = True
    min_password_length: int = 8

    @property
    def thumbs_dir(self) -> Path:
        return self.uploads_dir / self.thumbs_dirname

    def ensure_directories(self) -> None:
        """Create the upload and thumbnail directories."""
        self.thumbs_dir.mkdir(parents=True, exist_ok=True)
