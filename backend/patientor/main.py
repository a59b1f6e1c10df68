import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from patientor.config import Settings, get_settings
from patientor.db.memory import InMemoryDB
from patientor.api.middleware.rate_limit import RateLimitMiddleware
from patientor.api.routes import diagnoses, patients
from patientor.services.validation import EntryValidationError

logger = logging.getLogger(__name__)


async def validation_error_handler(request: Request, exc: EntryValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": exc.issues},
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.db = InMemoryDB.seeded() if settings.SEED_DATA else InMemoryDB()

    # Rate limiting (must be added before CORS so it runs after CORS in the middleware stack)
    app.add_middleware(
        RateLimitMiddleware,
        max_requests=settings.RATE_LIMIT_MAX_REQUESTS,
        window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
        trust_forwarded_for=settings.TRUST_PROXY_HEADERS,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(EntryValidationError, validation_error_handler)

    # API routes
    app.include_router(patients.router, prefix=settings.API_PREFIX, tags=["Patients"])
    app.include_router(diagnoses.router, prefix=settings.API_PREFIX, tags=["Diagnoses"])

    @app.get(f"{settings.API_PREFIX}/ping")
    async def ping():
        logger.debug("someone pinged here")
        return "pong"

    @app.get("/health")
    async def health_check():
        return {"status": "healthy", "service": settings.APP_NAME}

    logger.info("%s %s ready (seeded=%s)", settings.APP_NAME, settings.APP_VERSION, settings.SEED_DATA)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("patientor.main:app", host="0.0.0.0", port=3001, reload=True)
