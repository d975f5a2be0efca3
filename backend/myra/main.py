"""FastAPI application entry point."""
from __future__ import annotations
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from myra.api import auth, issues, pastures, plans, requirements, schedules, zones
from myra.api.errors import register_exception_handlers
from myra.container import get_database
from myra.core.logging import setup_logging
from myra.persistence.db import init_db

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------
# Lifespan: logging, then DB schema
# ------------------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    database = app.dependency_overrides.get(get_database, get_database)()
    init_db(database)
    logger.info("MyRA API started (database %s)", database.path)
    yield
    logger.info("MyRA API shutting down")


# ------------------------------------------------------------------
# App creation
# ------------------------------------------------------------------
app = FastAPI(
    title="MyRA Range Plan API",
    description="Range use plans, their pastures, schedules and issues",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS: allow everything for local dev (restrict for production)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.get("/health", tags=["health"])
def health():
    return {"status": "ok"}


# ------------------------------------------------------------------
# Routers
# ------------------------------------------------------------------
app.include_router(auth.router)
app.include_router(zones.router)
app.include_router(plans.router)
app.include_router(pastures.router)
app.include_router(schedules.router)
app.include_router(issues.router)
app.include_router(requirements.router)
