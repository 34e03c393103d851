from contextlib import asynccontextmanager
import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from campus.config import get_settings
from campus.database import SessionLocal
from campus.errors import install_error_handlers
from campus.logging_middleware import add_audit_middleware
from campus.rate_limit import apply_rate_limiter
from campus.seed import bootstrap
from services.auth.router import router as auth_router
from services.booking_requests.router import router as booking_requests_router
from services.catalogs.router import router as catalogs_router
from services.schedules.router import router as schedules_router

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    if settings.run_db_migrations:
        with SessionLocal() as db:
            bootstrap(db, settings)
    yield


def create_app() -> FastAPI:
    fastapi_app = FastAPI(title="Campus Info Portal", version="0.3.0", lifespan=lifespan)
    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    apply_rate_limiter(fastapi_app)
    add_audit_middleware(fastapi_app, "portal")
    install_error_handlers(fastapi_app)

    fastapi_app.include_router(auth_router)
    fastapi_app.include_router(catalogs_router)
    fastapi_app.include_router(schedules_router)
    fastapi_app.include_router(booking_requests_router)
    return fastapi_app


app = create_app()


@app.get("/api/health", tags=["health"])
def health() -> dict[str, str]:
    return {"status": "OK", "message": "Campus Info API is running"}


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    logger.info("Starting portal API on %s:%s", settings.api_host, settings.api_port)
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    main()
