"""Meal description parsing via a structured-output language model."""

from dataclasses import dataclass
from typing import Protocol

from pydantic import TypeAdapter, ValidationError

from nutritrack.domain.nutrition import NutritionData

EXTRACTION_FAILED_MESSAGE = (
    "Die Mahlzeit konnte nicht analysiert werden. Bitte versuchen Sie es erneut."
)

NUTRITION_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "items": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "itemName": {
                        "type": "string",
                        "description": "Name des Lebensmittels auf Deutsch",
                    },
                    "calories": {
                        "type": "number",
                        "description": "Gesamtkalorien in kcal",
                    },
                    "protein": {
                        "type": "number",
                        "description": "Gesamtprotein in Gramm",
                    },
                    "fat": {"type": "number", "description": "Gesamtfett in Gramm"},
                    "carbs": {
                        "type": "number",
                        "description": "Gesamtkohlenhydrate in Gramm",
                    },
                },
                "required": ["itemName", "calories", "protein", "fat", "carbs"],
                "additionalProperties": False,
            },
        }
    },
    "required": ["items"],
    "additionalProperties": False,
}

_NUTRITION_LIST = TypeAdapter(list[NutritionData])


class BlankDescriptionError(ValueError):
    """Raised when a meal description is empty after trimming."""


class ExtractionError(RuntimeError):
    """Raised when a meal description could not be turned into nutrition data."""


class NutritionModelClient(Protocol):
    """Interface for structured-output LLM calls."""

    async def extract(
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Return the model output parsed as JSON."""


class MealExtractor(Protocol):
    """Anything that turns a meal description into nutrition records."""

    async def parse_meal(self, description: str) -> list[NutritionData]:
        """Return one record per food item in the description."""


def require_description(description: str) -> str:
    """Return the trimmed description or raise for blank input."""
    cleaned = description.strip()
    if not cleaned:
        raise BlankDescriptionError("Meal description is blank")
    return cleaned


def parse_nutrition_list(payload: object) -> list[NutritionData]:
    """Validate a JSON array of nutrition records."""
    try:
        return _NUTRITION_LIST.validate_python(payload)
    except ValidationError as exc:
        raise ExtractionError("Malformed nutrition payload") from exc


@dataclass
class MealParsingService(MealExtractor):
    """Service that prompts the model and validates its answer."""

    client: NutritionModelClient
    model: str
    reasoning_effort: str | None
    store: bool

    async def parse_meal(self, description: str) -> list[NutritionData]:
        """Extract nutrition estimates for every food item mentioned."""
        require_description(description)
        try:
            raw = await self.client.extract(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                schema=NUTRITION_SCHEMA,
                prompt=_build_prompt(description),
            )
        except ExtractionError:
            raise
        except Exception as exc:
            raise ExtractionError("Nutrition model call failed") from exc
        if not isinstance(raw, dict):
            raise ExtractionError("Model output is not a JSON object")
        return parse_nutrition_list(raw.get("items"))


def _build_prompt(description: str) -> str:
    return (
        "Extrahiere die Nährwertinformationen für die folgende "
        f'Mahlzeitenbeschreibung: "{description}". '
        "Gib genaue Schätzungen basierend auf Standard-Nährwertdaten an. "
        "Die Namen der Lebensmittel im JSON sollten auf Deutsch sein."
    )
