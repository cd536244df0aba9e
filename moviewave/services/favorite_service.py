import logging
import uuid
from datetime import date
from typing import Any, Dict, List

from ..exceptions import AlreadyExists
from ..repositories.favorite_repository import FavoriteRepository
from .content_service import ContentService

logger = logging.getLogger(__name__)


class FavoriteService:
    def __init__(self, favorite_repo: FavoriteRepository, content_service: ContentService):
        self.favorite_repo = favorite_repo
        self.content_service = content_service

    async def add(self, user_id: str, external_id: str) -> Dict[str, Any]:
        content_id = await self.content_service.resolve(external_id)

        # check-then-insert, there is no unique constraint behind it
        if await self.favorite_repo.get(user_id, content_id):
            raise AlreadyExists("Already in favorites")

        favorite = await self.favorite_repo.create(str(uuid.uuid4()), user_id, content_id, date.today())
        logger.info("Favorite added", extra={"user_id": user_id, "content_id": content_id})
        return favorite

    async def remove(self, user_id: str, external_id: str):
        content_id = await self.content_service.find(external_id)
        if content_id is None:
            return
        await self.favorite_repo.delete(user_id, content_id)
        logger.info("Favorite removed", extra={"user_id": user_id, "content_id": content_id})

    async def check(self, user_id: str, external_id: str) -> bool:
        content_id = await self.content_service.find(external_id)
        if content_id is None:
            return False
        return await self.favorite_repo.get(user_id, content_id) is not None

    async def list(self, user_id: str) -> List[Dict[str, Any]]:
        return await self.favorite_repo.list_by_user(user_id)
