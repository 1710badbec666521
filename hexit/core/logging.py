"""Loguru logging setup"""
import sys
from loguru import logger
from .config import get_settings

settings = get_settings()

logger.remove()
logger.add(
    sys.stdout,
    format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {message} | {extra}",
    level=settings.log_level.upper(),
)

__all__ = ["logger"]
