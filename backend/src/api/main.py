"""FastAPI application main entry point."""

from __future__ import annotations

from contextlib import asynccontextmanager
import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

load_dotenv()

from ..services.config import configure_logging, get_config
from .dependencies import get_note_store
from .middleware import register_error_handlers
from .routes import graph, links, notes, search

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and warm the note store before serving."""
    configure_logging()
    store = get_note_store()
    logger.info("Startup complete", extra={"note_count": len(store)})
    yield


app = FastAPI(
    title="KB Pro API",
    description="Local note search and link suggestions",
    version="0.1.0",
    lifespan=lifespan,
)

config = get_config()

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(config.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Sub-resource routes (/api/notes/{id}/...) must be matched before the
# catch-all note path in the notes router.
app.include_router(graph.router, tags=["graph"])
app.include_router(links.router, tags=["links"])
app.include_router(search.router, tags=["search"])
app.include_router(notes.router, tags=["notes"])


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
