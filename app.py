import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

import config
from core.api import install_exception_handlers, success_response
from core.startup import lifespan
from journeys import router as journeys_router

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Build the FastAPI application with routers, CORS and error envelopes."""
    app = FastAPI(title="Journey Log", lifespan=lifespan)

    origins = config.get_cors_origins()
    if origins == ["*"]:
        logger.warning("CORS_ALLOWED_ORIGINS not set. Allowing all origins.")
    else:
        logger.info("CORS configured with specific origins: %s", origins)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=origins != ["*"],
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    install_exception_handlers(app)
    app.include_router(journeys_router)

    @app.get("/", tags=["status"])
    async def read_root():
        return success_response(message="API is running")

    @app.get("/api/health", tags=["status"])
    async def health(request: Request):
        db_manager = getattr(request.app.state, "db_manager", None)
        connected = db_manager is not None and await db_manager.ping()
        return success_response({"database": "connected" if connected else "unavailable"})

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app:app",
        host="0.0.0.0",
        port=config.PORT,
        log_level=config.LOG_LEVEL.lower(),
    )
