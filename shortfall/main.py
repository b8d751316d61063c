from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shortfall.api import (
    analysis_router,
    archidekt_router,
    collection_router,
    data_router,
    decks_router,
    health_router,
)
from shortfall.config import settings
from shortfall.db.database import init_db


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    await init_db()
    yield


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("shortfall"),
    lifespan=lifespan,
)

app.include_router(analysis_router)
app.include_router(archidekt_router)
app.include_router(collection_router)
app.include_router(data_router)
app.include_router(decks_router)
app.include_router(health_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
