"""FastAPI application entrypoint. No business logic; only wiring, middleware and startup seeding."""

from dotenv import load_dotenv

load_dotenv()

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from subordinates.api.v1 import router as v1_router
from subordinates.core.config import configure_logging, settings
from subordinates.core.state import get_finder, seed_finder


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Configure logging and load seed roles/users (if configured) before serving."""
    configure_logging(settings)
    seed_finder(get_finder(), settings)
    yield


app = FastAPI(
    title="Subordinates API",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.APP_ENV == "dev" else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(v1_router, prefix=settings.API_V1_PREFIX)


@app.get("/")
def root() -> dict[str, str]:
    """Root route; minimal payload for discovery."""
    return {"message": "Subordinates API"}
