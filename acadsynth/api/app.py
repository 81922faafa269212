"""
acadsynth FastAPI application.
"""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from acadsynth.api.routes import dataset, health, views
from acadsynth.core.dataset import DatasetGenerator
from acadsynth.shared.config import settings
from acadsynth.shared.logging import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: generate the dataset once at startup."""
    logger.info("Starting acadsynth API")

    generator = DatasetGenerator(settings)
    app.state.generator = generator
    app.state.calendar = generator.calendar
    app.state.dataset = generator.generate(settings.dataset.num_students)
    app.state.settings = settings

    health.set_start_time(time.time())

    logger.info("acadsynth API ready", extra={"students": len(app.state.dataset)})
    yield

    logger.info("acadsynth API stopped")


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    app = FastAPI(
        title="acadsynth",
        description="Synthetic academic dataset with student, teacher and tutor views",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(dataset.router)
    app.include_router(views.router)

    @app.get("/")
    async def root():
        return {"service": "acadsynth", "status": "running"}

    return app


app = create_app()


def main():
    """CLI entry point for uvicorn."""
    import uvicorn

    uvicorn.run(
        "acadsynth.api.app:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=False,
    )


if __name__ == "__main__":
    main()
