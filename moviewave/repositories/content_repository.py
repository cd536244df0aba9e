from datetime import date
from typing import Optional

from asyncpg import Pool


class ContentRepository:
    def __init__(self, db: Pool):
        self.db = db

    async def get_id_by_external_id(self, external_id: str) -> Optional[str]:
        # LIMIT 1: racing first requests may have inserted the same external id twice
        query = """
            SELECT id_contenido
            FROM "Contenido"
            WHERE id_externo = $1
            ORDER BY fecha NULLS LAST
            LIMIT 1
        """
        content_id = await self.db.fetchval(query, external_id)
        return str(content_id) if content_id is not None else None

    async def create_placeholder(self, content_id: str, external_id: str, created_on: date) -> str:
        query = """
            INSERT INTO "Contenido" (
                id_contenido,
                id_externo,
                titulo,
                tipo,
                fecha,
                duracion,
                calificacion
            ) VALUES ($1, $2, $3, 'video', $4, '00:00', 0)
            RETURNING id_contenido
        """
        new_id = await self.db.fetchval(query, content_id, external_id, f"Video {external_id}", created_on)
        return str(new_id)
