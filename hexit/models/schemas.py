"""Pydantic schemas for palettes and API responses"""
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional


class SwatchName(str, Enum):
    """Tonal categories a palette is split into"""
    VIBRANT = "Vibrant"
    MUTED = "Muted"
    DARK_VIBRANT = "DarkVibrant"
    LIGHT_VIBRANT = "LightVibrant"
    DARK_MUTED = "DarkMuted"
    LIGHT_MUTED = "LightMuted"


class Swatch(BaseModel):
    """One named color of a palette"""
    model_config = ConfigDict(frozen=True)

    name: SwatchName
    hex: str = Field(..., description="Color as '#rrggbb'")
    population: int = Field(default=0, ge=0, description="Pixels represented")


# Names may be missing or map to None when the image lacks that tone
Palette = Dict[SwatchName, Optional[Swatch]]


class ColorResult(BaseModel):
    """Successful extraction response"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    image_url: str = Field(..., alias="imageUrl")
    colors: List[str] = Field(default_factory=list, max_length=2)


class ErrorResult(BaseModel):
    """Failed extraction response"""
    error: str


class HealthResponse(BaseModel):
    """Health check response"""
    status: str
    version: str
    ranking_policy: str
