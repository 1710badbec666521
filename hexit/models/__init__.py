"""Data models and schemas"""
from .schemas import *

__all__ = [
    "SwatchName",
    "Swatch",
    "Palette",
    "ColorResult",
    "ErrorResult",
    "HealthResponse"
]
