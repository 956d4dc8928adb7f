import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bepo import __version__
from bepo.api import api_router
from bepo.core.logging import configure_logging
from bepo.core.settings import get_settings

configure_logging()
settings = get_settings()
logger = logging.getLogger(__name__)

app = FastAPI(title="Bepo Insulin Calculator", version=__version__)


def _collect_cors_origins() -> list[str]:
    default_origins = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]

    collected: list[str] = []
    for origin in (*default_origins, *settings.security.cors_origins):
        if origin and origin not in collected:
            collected.append(origin)

    return collected


app.add_middleware(
    CORSMiddleware,
    allow_origins=_collect_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api")


@app.on_event("startup")
async def startup_event() -> None:
    # Ensure models are registered before creating tables
    import bepo.models  # noqa: F401

    from bepo.core.db import create_tables, init_db

    init_db()
    await create_tables()
    logger.info("Database ready")


@app.on_event("shutdown")
async def shutdown_event() -> None:
    from bepo.core.db import dispose_engine

    await dispose_engine()


@app.get("/", include_in_schema=False)
def root():
    return {"message": "Bepo Insulin Calculator backend running"}
