"""
FastAPI application entry point for Idea Incubator
"""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from incubator.config import get_settings
from incubator.exceptions import IncubatorError
from incubator.logging_config import logger, setup_logging
from incubator.routes import ROUTERS
from incubator.services import CatalogService
from incubator.storage import Storage, build_storage


def create_app(storage: Optional[Storage] = None, seed_questions: Optional[bool] = None) -> FastAPI:
    """Build the application around a storage backend.

    When no backend is passed one is chosen from configuration at startup.
    ``seed_questions`` overrides SEED_DEFAULT_QUESTIONS.
    """
    settings = get_settings()
    if seed_questions is None:
        seed_questions = settings.SEED_DEFAULT_QUESTIONS

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager"""
        # Startup
        setup_logging()
        logger.info("Idea Incubator starting up")

        backend = storage if storage is not None else build_storage(settings)
        await backend.initialize()
        app.state.storage = backend

        if seed_questions:
            created = await CatalogService(backend).seed_default_questions()
            if created:
                logger.info(f"Seeded {created} default questions")

        yield

        # Shutdown
        await backend.close()
        logger.info("Idea Incubator shutting down")

    app = FastAPI(
        title="Idea Incubator",
        description="Capture, refine and version product ideas through guided questions",
        version=settings.DEFAULT_APP_VERSION,
        lifespan=lifespan,
    )

    @app.exception_handler(IncubatorError)
    async def incubator_error_handler(request: Request, exc: IncubatorError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {str(exc)}")
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})

    @app.get("/")
    async def root():
        return {"message": "Idea Incubator is running", "status": "healthy"}

    @app.get("/health")
    async def health_check(request: Request):
        """Health check endpoint for monitoring"""
        healthy = await request.app.state.storage.health_check()
        return JSONResponse(
            status_code=200 if healthy else 503,
            content={
                "status": "healthy" if healthy else "unhealthy",
                "service": "idea-incubator",
                "storage": type(request.app.state.storage).__name__,
            },
        )

    for router in ROUTERS:
        app.include_router(router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("incubator.main:app", host="0.0.0.0", port=8000)
