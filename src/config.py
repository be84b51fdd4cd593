"""Runtime settings, read from PEDIGREE_* environment variables or a .env file."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="PEDIGREE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = "WARNING"
    log_json: bool = False

    # Default size for rendered images; 0 keeps the stored size
    image_width: int = 0
    image_height: int = 0
