import logging
import os
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from agenda.api.deps import get_settings
from agenda.app_shell.config import validate_ops_rules
from agenda.rules.loader import load_rules

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    logging.basicConfig(
        level=os.environ.get("AGENDA_LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    settings = get_settings()

    # Load rules and validate on startup (fail-fast)
    try:
        rules = load_rules(settings.rules_path)
    except (FileNotFoundError, ValueError) as e:
        logger.critical(f"Rules load failed: {e}")
        sys.exit(1)

    validate_ops_rules(rules, settings.data_dir)
    logger.info(f"Rules v{rules.project.rules_version} loaded from {settings.rules_path}")

    yield


app = FastAPI(
    title="Agenda DNE Music API",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# --- Routers ---
from agenda.api.routes import (  # noqa: E402
    auth,
    bands,
    contractors,
    contracts,
    dashboard,
    events,
    importer,
    prospecting,
    public,
    users,
)

app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
app.include_router(users.router, prefix="/api/users", tags=["Users"])
app.include_router(bands.router, prefix="/api/bands", tags=["Bands"])
app.include_router(contractors.router, prefix="/api/contractors", tags=["Contractors"])
app.include_router(events.router, prefix="/api/events", tags=["Events"])
app.include_router(contracts.router, prefix="/api/contract-template", tags=["Contracts"])
app.include_router(importer.router, prefix="/api/import", tags=["Import"])
app.include_router(dashboard.router, prefix="/api", tags=["Dashboard"])
app.include_router(prospecting.router, prefix="/api/prospecting-tokens", tags=["Prospecting"])
app.include_router(public.router, prefix="/api/public", tags=["Public"])


# CORS (Allow Frontend)
origins = [
    o.strip()
    for o in os.environ.get("AGENDA_CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000").split(",")
    if o.strip()
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health_check() -> dict[str, Any]:
    """Health check endpoint."""
    return {"status": "ok", "service": "api"}
