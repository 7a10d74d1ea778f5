"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = "photoapp"
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Output encoding
    default_output_format: str = "jpg"
    jpeg_quality: int = 90

    # Upload validation
    max_image_size_mb: float = 10.0
    allowed_image_formats: str = "jpeg,png,bmp,gif,webp"

    # Upper bound for requested resize width/height
    max_transform_dimension: int = 8192

    @property
    def max_image_size_bytes(self) -> int:
        """Upload ceiling in bytes."""
        return int(self.max_image_size_mb * 1024 * 1024)

    @property
    def allowed_image_formats_list(self) -> list[str]:
        """Parse allowed input formats from comma-separated string."""
        return [
            fmt.strip().lower()
            for fmt in self.allowed_image_formats.split(",")
            if fmt.strip()
        ]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
