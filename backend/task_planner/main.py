"""FastAPI application for the task planner: store lifecycle, probes, and `/api` routes."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from task_planner.api.categories import router as categories_router
from task_planner.api.data_transfer import router as data_router
from task_planner.api.reminders import router as reminders_router
from task_planner.api.statistics import router as statistics_router
from task_planner.api.tasks import router as tasks_router
from task_planner.core.config import settings
from task_planner.core.error_handling import install_error_handling
from task_planner.core.logging import configure_logging, get_logger
from task_planner.db.store import EntityStore, build_store
from task_planner.schemas.health import HealthStatusResponse, ReadinessStatusResponse

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

configure_logging()
logger = get_logger(__name__)

OPENAPI_TAGS = [
    {"name": "health", "description": "Liveness and readiness probes."},
    {"name": "tasks", "description": "Task CRUD, completion toggling, and filtered listings."},
    {
        "name": "categories",
        "description": (
            "Category CRUD. Tasks reference categories by name, so a category "
            "still in use cannot be deleted until its tasks are reassigned or removed."
        ),
    },
    {"name": "statistics", "description": "Completion rate, per-category totals, window counts."},
    {"name": "reminders", "description": "Reminder times computed for incomplete tasks."},
    {"name": "data", "description": "Whole-store export, import, and reset to sample data."},
]


def _current_store(fastapi_app: FastAPI) -> EntityStore | None:
    store = getattr(fastapi_app.state, "store", None)
    return store if isinstance(store, EntityStore) else None


@asynccontextmanager
async def lifespan(fastapi_app: FastAPI) -> AsyncIterator[None]:
    """Build and open the entity store, then close it on shutdown."""
    logger.info(
        "app.lifecycle.starting environment=%s storage_backend=%s",
        settings.environment,
        settings.storage_backend.value,
    )
    store = _current_store(fastapi_app)
    if store is None:
        store = build_store(settings)
        fastapi_app.state.store = store
    if not store.is_open:
        store.open()
    logger.info("app.lifecycle.started", extra={"backend": store.backend.description})
    try:
        yield
    finally:
        store.close()
        logger.info("app.lifecycle.stopped")


app = FastAPI(
    title="Task Planner API",
    version="0.1.0",
    lifespan=lifespan,
    openapi_tags=OPENAPI_TAGS,
)

origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
if origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    logger.info("app.cors.enabled origins_count=%s", len(origins))
else:
    logger.info("app.cors.disabled")

install_error_handling(app)


@app.get("/health", tags=["health"], response_model=HealthStatusResponse)
@app.get("/healthz", tags=["health"], response_model=HealthStatusResponse)
def health() -> HealthStatusResponse:
    """Liveness: the process is up and serving requests."""
    return HealthStatusResponse(ok=True)


@app.get("/readyz", tags=["health"], response_model=ReadinessStatusResponse)
def readyz(request: Request) -> ReadinessStatusResponse:
    """Readiness: the entity store has been opened."""
    store = _current_store(request.app)
    if store is None:
        return ReadinessStatusResponse(ok=False)
    return ReadinessStatusResponse(ok=store.is_open, backend=store.backend.description)


api = APIRouter(prefix="/api")
for router in (
    tasks_router,
    categories_router,
    statistics_router,
    reminders_router,
    data_router,
):
    api.include_router(router)
app.include_router(api)

logger.debug("app.routes.registered count=%s", len(app.routes))
