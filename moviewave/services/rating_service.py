import logging
import uuid
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

import asyncpg

from ..exceptions import BadRequest, NotFound, ProcessingFailed
from ..repositories.rating_repository import RatingRepository
from ..schemas.rating import RatingRequest
from .content_service import ContentService

logger = logging.getLogger(__name__)


def normalize_comment(comment: Optional[str]) -> Optional[str]:
    if comment is None or not comment.strip():
        return None
    return comment


class RatingService:
    def __init__(self, rating_repo: RatingRepository, content_service: ContentService):
        self.rating_repo = rating_repo
        self.content_service = content_service

    async def upsert(self, user_id: str, request: RatingRequest) -> Tuple[Dict[str, Any], bool]:
        """
        Create the user's rating for a provider video or update it in place.
        Returns (row, created). Only fields present in the request are written.
        """
        supplied = request.supplied_fields()
        if "comentario" in supplied:
            supplied["comentario"] = normalize_comment(supplied["comentario"])

        try:
            content_id = await self.content_service.find(request.id_contenido)
            existing = await self.rating_repo.get(user_id, content_id) if content_id else None

            if existing:
                row = await self.rating_repo.update(
                    existing["id_calificacion"], {**supplied, "fecha": date.today()}
                )
                logger.info("Rating updated", extra={"user_id": user_id, "content_id": content_id})
                return row, False

            score = supplied.get("puntuacion")
            comment = supplied.get("comentario")
            if score is None and comment is None:
                raise BadRequest("A new rating needs a score or a non-empty comment")

            # Content is only registered once something will reference it
            if content_id is None:
                content_id = await self.content_service.resolve(request.id_contenido)
            row = await self.rating_repo.create(
                str(uuid.uuid4()), user_id, content_id, score, comment, date.today()
            )
            logger.info("Rating created", extra={"user_id": user_id, "content_id": content_id})
            return row, True
        except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as exc:
            raise ProcessingFailed("Error processing rating") from exc

    async def get_user_rating(self, user_id: str, external_id: str) -> Dict[str, Any]:
        content_id = await self.content_service.find(external_id)
        if not content_id:
            return {"hasRating": False, "calificacion": None}
        rating = await self.rating_repo.get(user_id, content_id)
        return {"hasRating": rating is not None, "calificacion": rating}

    async def list_user_ratings(self, user_id: str) -> List[Dict[str, Any]]:
        return await self.rating_repo.list_by_user(user_id)

    async def list_content_ratings(self, external_id: str) -> List[Dict[str, Any]]:
        content_id = await self.content_service.find(external_id)
        if not content_id:
            return []
        return await self.rating_repo.list_by_content(content_id)

    async def delete_rating(self, user_id: str, external_id: str):
        content_id = await self.content_service.find(external_id)
        if not content_id:
            raise NotFound("Content not found")
        await self.rating_repo.delete(user_id, content_id)
        logger.info("Rating deleted", extra={"user_id": user_id, "content_id": content_id})
