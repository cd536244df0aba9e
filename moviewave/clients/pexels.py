from typing import Any, Dict, List

import httpx


class PexelsClient:
    """Thin wrapper around the Pexels video search endpoint."""
    BASE_URL = "https://api.pexels.com"

    def __init__(self, http: httpx.AsyncClient, api_key: str):
        self.http = http
        self.api_key = api_key

    async def search_videos(self, query: str, per_page: int) -> List[Dict[str, Any]]:
        """Raw provider results for *query*; raises httpx.HTTPError on failure."""
        response = await self.http.get(
            f"{self.BASE_URL}/videos/search",
            params={"query": query, "per_page": per_page},
            headers={"Authorization": self.api_key},
        )
        response.raise_for_status()
        return response.json().get("videos") or []
