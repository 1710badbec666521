"""Services for business logic"""
from .extractor import PaletteExtractor, VibrantExtractor
from .fetcher import ImageFetcher
from .ranker import rank_swatches, rank_by_priority, rank_by_dominance

__all__ = [
    "PaletteExtractor",
    "VibrantExtractor",
    "ImageFetcher",
    "rank_swatches",
    "rank_by_priority",
    "rank_by_dominance",
]
