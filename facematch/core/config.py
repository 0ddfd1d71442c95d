"""Configuration settings for the face-match evaluation service."""
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    These settings are loaded from environment variables with the following precedence:
    1. Environment variables
    2. .env file
    3. Default values

    Attributes:
        FACE_MATCH_THRESHOLD: Similarity threshold (0-1) shared by matching and decisions
        FACE_DETECTION_PROVIDER: Name of the detection backend created at startup
    """
    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_prefix="",
        env_nested_delimiter="__"
    )

    # Core Settings
    PROJECT_NAME: str = "Face Match Service"
    VERSION: str = "0.1.0"
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: str = "development"

    # CORS Settings
    ALLOWED_ORIGINS: str = "http://localhost:3000"

    @property
    def cors_origins(self) -> List[str]:
        """Get list of allowed origins."""
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",")]

    # Face matching settings
    # 0.4 similarity corresponds to a Euclidean distance of 0.6
    FACE_MATCH_THRESHOLD: float = Field(0.4, ge=0.0, le=1.0)

    # Detection provider settings
    FACE_DETECTION_PROVIDER: str = "insightface"
    MODEL_NAME: str = "buffalo_l"
    MODEL_CACHE_DIR: str = ".model_cache"
    DETECTION_SIZE: int = 640
    YUNET_MODEL_PATH: Optional[str] = None
    SFACE_MODEL_PATH: Optional[str] = None
    DETECTION_MAX_DIMENSION: int = 600  # Longest side in pixels before downscaling
    MIN_FACE_CONFIDENCE: float = 0.65  # Filters out most non-human faces
    MIN_FACE_SIZE: int = 120  # Minimum face width or height in pixels

    # Optional settings with defaults
    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 8000

settings = Settings()
