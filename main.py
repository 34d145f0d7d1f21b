import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from freelancer_access.config import settings
from freelancer_access.database import Base, engine
from freelancer_access.exception_handlers import register_exception_handlers
from freelancer_access.routes import access, access_logs, content, templates
from freelancer_access.routes import settings as settings_routes

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Create the FastAPI application."""
    app = FastAPI(
        title=settings.app_name,
        description="Per-user content access restriction for editors and freelancers",
        debug=settings.debug,
        version=settings.app_version,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(content.router, prefix="/api/v1")
    app.include_router(access.router, prefix="/api/v1/access")
    app.include_router(templates.router, prefix="/api/v1")
    app.include_router(settings_routes.router, prefix="/api/v1")
    app.include_router(access_logs.router, prefix="/api/v1")

    if settings.debug:
        logger.info(f"Running in {settings.environment} mode")
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)

    return app


app = create_app()


@app.on_event("startup")
async def startup_event():
    logger.info("Starting up the application...")
    if settings.debug:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created (if not existing).")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Shutting down the application...")
    await engine.dispose()


@app.get("/", tags=["Root"])
async def root():
    return {"message": "Welcome to the Secure Freelancer Access API"}


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=settings.debug)
