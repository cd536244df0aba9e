import asyncio
import logging
from datetime import date
from typing import Any, Dict, List, Optional

import httpx

from ..clients.pexels import PexelsClient
from ..exceptions import ConfigurationError, UpstreamFailure

logger = logging.getLogger(__name__)

POPULAR_QUERY = "popular"
POPULAR_GENRES = ["action", "comedy", "romance", "horror", "sci-fi", "adventure", "animation"]
PER_GENRE_LIMIT = 6
SEARCH_LIMIT = 12
UNTITLED = "untitled"


def to_card(video: Dict[str, Any], genre: str, year: int) -> Dict[str, Any]:
    files = video.get("video_files") or []
    return {
        "id": video["id"],
        "title": (video.get("user") or {}).get("name") or UNTITLED,
        "genre": genre,
        "year": year,
        "poster": video.get("image"),
        "videoUrl": files[0].get("link") if files else None,
    }


def to_cards(videos: List[Dict[str, Any]], genre: str) -> List[Dict[str, Any]]:
    """Cards for every provider item that carries an id; id-less items are skipped."""
    year = date.today().year
    return [to_card(v, genre, year) for v in videos if v.get("id") is not None]


class VideoCatalogService:
    def __init__(self, pexels: Optional[PexelsClient]):
        # pexels is None when PEXELS_API_KEY is not configured
        self.pexels = pexels

    async def search(self, query: Optional[str] = None) -> List[Dict[str, Any]]:
        if self.pexels is None:
            raise ConfigurationError("Server configuration incomplete")

        term = (query or "").strip().lower() or POPULAR_QUERY
        if term == POPULAR_QUERY:
            return await self._popular()

        try:
            videos = await self.pexels.search_videos(term, SEARCH_LIMIT)
            cards = to_cards(videos, term)
        except (httpx.HTTPError, ValueError, TypeError, AttributeError, KeyError) as exc:
            raise UpstreamFailure("Error loading videos") from exc

        logger.info(f"Pexels returned {len(cards)} videos", extra={"query": term})
        return cards

    async def _popular(self) -> List[Dict[str, Any]]:
        results = await asyncio.gather(*(self._genre(genre) for genre in POPULAR_GENRES))
        return [card for cards in results for card in cards]

    async def _genre(self, genre: str) -> List[Dict[str, Any]]:
        """One branch of the popular fan-out; a failure degrades to no cards."""
        try:
            videos = await self.pexels.search_videos(genre, PER_GENRE_LIMIT)
            return to_cards(videos, genre)
        except Exception as exc:
            logger.warning(f"Pexels failed for genre {genre}: {exc}", extra={"genre": genre})
            return []
