"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse

from nutritrack.api.models import (
    DashboardResponse,
    NavigationRequest,
    ParseMealRequest,
    SubmitMealRequest,
)
from nutritrack.api.page import PAGE_HTML
from nutritrack.app_logging import configure_logging
from nutritrack.containers import AppContainer
from nutritrack.services.extraction import BlankDescriptionError, ExtractionError

RELAY_ERROR_MESSAGE = "Fehler bei der Analyse der Mahlzeit"


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container
    container.meal_tracker.load()

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/", response_class=HTMLResponse)
    async def index() -> HTMLResponse:
        """Single-page tracker UI."""
        return HTMLResponse(PAGE_HTML)

    @app.post("/api/parseMeal")
    async def parse_meal(payload: ParseMealRequest, request: Request) -> JSONResponse:
        """Relay a meal description to the model and return nutrition records."""
        state_container: AppContainer = request.app.state.container
        try:
            items = await state_container.parsing_service.parse_meal(
                payload.description
            )
        except BlankDescriptionError:
            return JSONResponse(status_code=400, content={"error": RELAY_ERROR_MESSAGE})
        except ExtractionError:
            logger.exception("Meal analysis failed")
            return JSONResponse(status_code=500, content={"error": RELAY_ERROR_MESSAGE})
        return JSONResponse(content=[item.model_dump(by_alias=True) for item in items])

    @app.get("/api/dashboard", response_model=DashboardResponse)
    async def dashboard(request: Request) -> DashboardResponse:
        """Return the current entries, totals and view flags."""
        return _dashboard(request)

    @app.post("/api/entries", response_model=DashboardResponse)
    async def submit_entry(
        payload: SubmitMealRequest, request: Request
    ) -> DashboardResponse:
        """Analyze a meal description and log its items."""
        state_container: AppContainer = request.app.state.container
        await state_container.meal_tracker.submit(payload.description)
        return _dashboard(request)

    @app.delete("/api/entries/{entry_id}", response_model=DashboardResponse)
    async def delete_entry(entry_id: str, request: Request) -> DashboardResponse:
        """Remove a logged entry."""
        state_container: AppContainer = request.app.state.container
        state_container.meal_tracker.remove(entry_id)
        return _dashboard(request)

    @app.post("/api/theme/toggle", response_model=DashboardResponse)
    async def toggle_theme(request: Request) -> DashboardResponse:
        """Switch between light and dark mode."""
        state_container: AppContainer = request.app.state.container
        state_container.meal_tracker.toggle_theme()
        return _dashboard(request)

    @app.post("/api/navigation", response_model=DashboardResponse)
    async def navigate(
        payload: NavigationRequest, request: Request
    ) -> DashboardResponse:
        """Show the dashboard or go back to the landing page."""
        tracker = request.app.state.container.meal_tracker
        if payload.show_dashboard:
            tracker.open_dashboard()
        else:
            tracker.open_landing()
        return _dashboard(request)

    return app


def _dashboard(request: Request) -> DashboardResponse:
    state_container: AppContainer = request.app.state.container
    return DashboardResponse.from_snapshot(state_container.meal_tracker.snapshot())
