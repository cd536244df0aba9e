import logging
import uuid
from datetime import date
from typing import Optional

from ..repositories.content_repository import ContentRepository

logger = logging.getLogger(__name__)


class ContentService:
    """
    Maps provider (Pexels) ids to internal Contenido ids.
    find-or-create runs without a lock: two first requests for the same
    unseen id can both insert, and lookups then pick the oldest row.
    """
    def __init__(self, content_repo: ContentRepository):
        self.content_repo = content_repo

    async def find(self, external_id: str) -> Optional[str]:
        return await self.content_repo.get_id_by_external_id(external_id)

    async def resolve(self, external_id: str) -> str:
        content_id = await self.content_repo.get_id_by_external_id(external_id)
        if content_id:
            return content_id

        content_id = await self.content_repo.create_placeholder(
            str(uuid.uuid4()), external_id, date.today()
        )
        logger.info("Registered new content", extra={"content_id": content_id})
        return content_id
