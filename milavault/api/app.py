"""FastAPI app, CORS, and route registration."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s: %(name)s: %(message)s",
)

from milavault.api.state import AppState, get_state
from milavault.config import ensure_data_dir

# Import routes after state to avoid circular imports
from milavault.api.routes import edit, notes, people

__all__ = ["app", "AppState", "get_state"]

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    ensure_data_dir()
    result = get_state().vault.load()
    logger.info("Initial load: %s", result.outcome.value)
    yield


app = FastAPI(
    title="MilaVault API",
    description="Personal contact vault with locally persisted drafts",
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(people.router, prefix="/api/people", tags=["people"])
app.include_router(edit.router, prefix="/api/edit", tags=["edit"])
app.include_router(notes.router, prefix="/api/notes", tags=["notes"])
app.include_router(people.lock_router, prefix="/api", tags=["auth"])
