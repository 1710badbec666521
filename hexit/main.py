"""Main FastAPI application"""
import os
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from hexit.core.config import get_settings
from hexit.core.errors import ColorExtractionError
from hexit.core.logging import logger
from hexit.api.routes import colors
from hexit.models.schemas import HealthResponse

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.bind(ranking_policy=settings.ranking_policy).info("Swatch ranking policy selected")
    if not os.path.isdir(settings.static_folder):
        logger.warning(f"Static folder not found: {settings.static_folder} (UI disabled)")
    logger.info(f"Server ready on {settings.host}:{settings.port}")

    yield

    logger.info("Shutting down...")


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Extract dominant colors from any image URL",
    lifespan=lifespan
)

# CORS middleware - allow_credentials=False required when using allow_origins=["*"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ColorExtractionError)
async def color_extraction_error_handler(request: Request, exc: ColorExtractionError):
    return colors.error_response(exc)


# Include routers
app.include_router(colors.router)


@app.get("/api", tags=["root"])
async def root():
    """API root endpoint"""
    return {
        "message": f"{settings.app_name} API",
        "version": settings.app_version,
        "docs": "/docs",
        "health": "/health"
    }


@app.get("/health", response_model=HealthResponse, tags=["health"])
async def health_check():
    """Health check endpoint"""
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        ranking_policy=settings.ranking_policy
    )


# Mount the client UI last so it does not shadow the API routes
if os.path.isdir(settings.static_folder):
    app.mount("/", StaticFiles(directory=settings.static_folder, html=True), name="ui")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "hexit.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
