"""
Study Plan Engine - Application Entry Point
"""

from fastapi import FastAPI

from studyplan.core.config import get_settings
from studyplan.core.logger import setup_logger

logger = setup_logger(__name__)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.APP_TITLE,
        description="Locked-day aware study plan allocation engine",
        version="0.1.0",
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )

    from studyplan.api import feasibility, locks, plans

    app.include_router(plans.router, prefix="/api/plans", tags=["plans"])
    app.include_router(locks.router, prefix="/api/locks", tags=["locks"])
    app.include_router(feasibility.router, prefix="/api/feasibility", tags=["feasibility"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    logger.info(f"{settings.APP_TITLE} application created")
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
