"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path

from supabase import create_client

from nutritrack.adapters.json_file_state_repository import JsonFileStateRepository
from nutritrack.adapters.openai_nutrition_client import OpenAINutritionClient
from nutritrack.adapters.relay_client import HttpxRelayClient
from nutritrack.adapters.supabase_state_repository import SupabaseStateRepository
from nutritrack.config import Settings
from nutritrack.domain.dashboard import Theme
from nutritrack.services.entries import EntryStore
from nutritrack.services.extraction import MealExtractor, MealParsingService
from nutritrack.services.preferences import ThemeService
from nutritrack.services.state import StateRepository
from nutritrack.services.tracker import MealTracker


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    state_repository: StateRepository
    parsing_service: MealParsingService
    extractor: MealExtractor
    entry_store: EntryStore
    theme_service: ThemeService
    meal_tracker: MealTracker
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    state_repository = _build_state_repository(resolved_settings)
    model_client = OpenAINutritionClient.create(resolved_settings.openai_api_key)
    parsing_service = MealParsingService(
        client=model_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )
    relay_client = (
        HttpxRelayClient.create(
            url=resolved_settings.relay_url, timeout=resolved_settings.relay_timeout
        )
        if resolved_settings.relay_url
        else None
    )
    extractor: MealExtractor = relay_client or parsing_service
    entry_store = EntryStore(state_repository)
    theme_service = ThemeService(
        state_repository, default=Theme(resolved_settings.default_theme)
    )
    meal_tracker = MealTracker(
        store=entry_store,
        extractor=extractor,
        theme_service=theme_service,
    )

    async def close_resources() -> None:
        await model_client.close()
        if relay_client is not None:
            await relay_client.close()

    return AppContainer(
        settings=resolved_settings,
        state_repository=state_repository,
        parsing_service=parsing_service,
        extractor=extractor,
        entry_store=entry_store,
        theme_service=theme_service,
        meal_tracker=meal_tracker,
        close_resources=close_resources,
    )


def _build_state_repository(settings: Settings) -> StateRepository:
    if settings.uses_supabase:
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseStateRepository(client)
    return JsonFileStateRepository(Path(settings.state_file))
