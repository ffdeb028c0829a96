"""Shared test fixtures."""

import asyncio
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from nutritrack.config import Settings
from nutritrack.containers import AppContainer
from nutritrack.domain.nutrition import NutritionData
from nutritrack.services.entries import EntryStore
from nutritrack.services.extraction import (
    ExtractionError,
    MealExtractor,
    MealParsingService,
    NutritionModelClient,
)
from nutritrack.services.preferences import ThemeService
from nutritrack.services.state import StateRepository
from nutritrack.services.tracker import MealTracker

EGG = {"itemName": "Ei", "calories": 140, "protein": 12, "fat": 10, "carbs": 1}


@dataclass
class InMemoryStateRepository(StateRepository):
    """In-memory key-value slots for tests."""

    slots: dict[str, str] = field(default_factory=dict)
    writes: list[str] = field(default_factory=list)

    def get(self, key: str) -> str | None:
        return self.slots.get(key)

    def set(self, key: str, value: str) -> None:
        self.writes.append(key)
        self.slots[key] = value


@dataclass
class FakeModelClient(NutritionModelClient):
    """Fake model client returning a fixed payload."""

    payload: object = field(default_factory=lambda: {"items": [EGG]})
    error: Exception | None = None
    prompts: list[str] = field(default_factory=list)

    async def extract(
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.payload


@dataclass
class FakeExtractor(MealExtractor):
    """Extractor that records calls and returns canned records."""

    records: list[NutritionData] = field(
        default_factory=lambda: [NutritionData.model_validate(EGG)]
    )
    fail: bool = False
    calls: list[str] = field(default_factory=list)

    async def parse_meal(self, description: str) -> list[NutritionData]:
        self.calls.append(description)
        if self.fail:
            raise ExtractionError("upstream failed")
        return self.records


@dataclass
class GatedExtractor(MealExtractor):
    """Extractor whose calls finish only when the test releases them."""

    gates: dict[str, asyncio.Event] = field(default_factory=dict)
    outcomes: dict[str, list[NutritionData] | None] = field(default_factory=dict)

    async def parse_meal(self, description: str) -> list[NutritionData]:
        gate = self.gates.setdefault(description, asyncio.Event())
        await gate.wait()
        result = self.outcomes.get(description)
        if result is None:
            raise ExtractionError(f"failed: {description}")
        return result


def make_record(name: str, calories=0, protein=0, fat=0, carbs=0) -> NutritionData:
    return NutritionData(
        item_name=name, calories=calories, protein=protein, fat=fat, carbs=carbs
    )


def sequential_ids(prefix: str = "id"):
    counter = iter(range(1, 10_000))
    return lambda: f"{prefix}-{next(counter)}"


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        openai_api_key="openai-key",
        state_file=str(tmp_path / "state.json"),
        environment="test",
    )


@pytest.fixture
def state_repository() -> InMemoryStateRepository:
    return InMemoryStateRepository()


@pytest.fixture
def model_client() -> FakeModelClient:
    return FakeModelClient()


@pytest.fixture
def entry_store(state_repository: InMemoryStateRepository) -> EntryStore:
    return EntryStore(
        state_repository, clock=lambda: 1_700_000_000_000, id_factory=sequential_ids()
    )


@pytest.fixture
def container(
    settings: Settings,
    state_repository: InMemoryStateRepository,
    model_client: FakeModelClient,
    entry_store: EntryStore,
) -> AppContainer:
    parsing_service = MealParsingService(
        client=model_client,
        model=settings.openai_model,
        reasoning_effort=settings.openai_reasoning_effort,
        store=settings.openai_store,
    )
    theme_service = ThemeService(state_repository)
    meal_tracker = MealTracker(
        store=entry_store,
        extractor=parsing_service,
        theme_service=theme_service,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        state_repository=state_repository,
        parsing_service=parsing_service,
        extractor=parsing_service,
        entry_store=entry_store,
        theme_service=theme_service,
        meal_tracker=meal_tracker,
        close_resources=close_resources,
    )
