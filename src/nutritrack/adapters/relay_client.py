"""HTTP client for a remote meal parsing relay."""

from dataclasses import dataclass

import httpx

from nutritrack.domain.nutrition import NutritionData
from nutritrack.services.extraction import (
    ExtractionError,
    MealExtractor,
    parse_nutrition_list,
    require_description,
)


@dataclass
class HttpxRelayClient(MealExtractor):
    """Sends meal descriptions to ``POST /api/parseMeal`` on another host."""

    url: str
    http_client: httpx.AsyncClient
    timeout: float = 30.0

    @classmethod
    def create(cls, url: str, timeout: float) -> "HttpxRelayClient":
        """Create a relay client with a managed httpx session."""
        return cls(url=url, http_client=httpx.AsyncClient(), timeout=timeout)

    async def parse_meal(self, description: str) -> list[NutritionData]:
        """Post one description and validate the returned records."""
        require_description(description)
        try:
            response = await self.http_client.post(
                self.url,
                json={"description": description},
                timeout=self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise ExtractionError("Meal relay request failed") from exc
        return parse_nutrition_list(payload)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
