# localmedia/config.py
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# hi.html and friends ship inside the package
PACKAGE_STATIC = Path(__file__).resolve().parent / "static"

class Settings(BaseSettings):
    """Server settings, read from the environment and an optional .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = "127.0.0.1"
    port: int = 3000

    # Only the search endpoint needs this
    yt_api_key: Optional[str] = None
    yt_timeout: float = 30.0

    # user data lives under the working directory
    data_dir: Path = Field(default_factory=lambda: Path.cwd() / "data")
    images_dir: Path = Field(default_factory=lambda: Path.cwd() / "images")
    static_dir: Path = PACKAGE_STATIC
    index_file: str = "hi.html"

    max_upload_mb: int = 50
    max_json_mb: int = 20

    log_level: str = "INFO"

    @property
    def library_path(self) -> Path:
        return self.data_dir / "library.json"

    @property
    def journal_path(self) -> Path:
        return self.data_dir / "journal.json"

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024

    @property
    def max_json_bytes(self) -> int:
        return self.max_json_mb * 1024 * 1024

def get_settings() -> Settings:
    return Settings()
