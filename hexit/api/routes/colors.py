"""Color extraction routes"""
from typing import Optional
from fastapi import APIRouter, Depends, Query
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from hexit.core.config import get_settings
from hexit.core.errors import ColorExtractionError, ValidationError
from hexit.core.logging import logger
from hexit.models.schemas import ColorResult, ErrorResult
from hexit.services.extractor import PaletteExtractor, VibrantExtractor
from hexit.services.fetcher import ImageFetcher
from hexit.services.ranker import rank_swatches

router = APIRouter(tags=["colors"])

ERROR_RESPONSES = {
    400: {"model": ErrorResult, "description": "Image URL missing"},
    422: {"model": ErrorResult, "description": "No dominant colors found"},
    500: {"model": ErrorResult, "description": "Image could not be fetched or decoded"},
}


def get_fetcher() -> ImageFetcher:
    return ImageFetcher()


def get_extractor() -> PaletteExtractor:
    return VibrantExtractor()


def get_ranking_policy() -> str:
    return get_settings().ranking_policy


def error_response(error: ColorExtractionError) -> JSONResponse:
    """Render an error as {"error": message}"""
    return JSONResponse(
        status_code=error.status_code,
        content=ErrorResult(error=error.message).model_dump(),
    )


@router.get("/v2", response_model=ColorResult, response_model_by_alias=True,
            responses=ERROR_RESPONSES)
async def extract_colors(
    url: Optional[str] = Query(default=None, description="Image URL"),
    fetcher: ImageFetcher = Depends(get_fetcher),
    extractor: PaletteExtractor = Depends(get_extractor),
    policy: str = Depends(get_ranking_policy),
):
    """
    Extract up to two dominant colors from an image

    - **url**: Percent-encoded image URL (JPEG, PNG, GIF, ...)
    """
    if not url or not url.strip():
        raise ValidationError()

    try:
        image_bytes = await fetcher.fetch(url)
        palette = await run_in_threadpool(extractor.extract, image_bytes)
        colors = rank_swatches(palette, policy=policy)
    except ColorExtractionError as e:
        logger.bind(url=url, error_type=type(e).__name__).warning(f"Color extraction failed: {e}")
        raise
    except Exception as e:
        logger.bind(url=url).exception(f"Unexpected color extraction error: {e}")
        raise ColorExtractionError(str(e)) from e

    logger.bind(url=url, colors=colors, policy=policy).info("Colors extracted")
    return ColorResult(image_url=url, colors=colors)
