"""Application configuration"""
from typing import Literal
from pydantic import ConfigDict
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings"""
    model_config = ConfigDict(
        protected_namespaces=(),
        env_file=".env",
        case_sensitive=False,
    )

    # API Settings
    app_name: str = "HEXIT"
    app_version: str = "2.0.0"
    debug: bool = False

    # Server Settings
    host: str = "0.0.0.0"
    port: int = 8000

    # Logging
    log_level: str = "INFO"

    # Ranking Settings
    ranking_policy: Literal["priority", "dominance"] = "priority"
    dominance_ratio: float = 0.8

    # Fetch Settings
    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
    )

    # Palette Settings
    quantize_colors: int = 64
    max_image_dimension: int = 256

    # File Settings
    static_folder: str = "public"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
