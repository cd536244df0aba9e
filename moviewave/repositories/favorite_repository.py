from datetime import date
from typing import List, Optional

from asyncpg import Pool

from .sql import nest


class FavoriteRepository:
    def __init__(self, db: Pool):
        self.db = db

    async def get(self, user_id: str, content_id: str) -> Optional[dict]:
        query = """
            SELECT *
            FROM "Favoritos"
            WHERE id_usuario = $1 AND id_contenido = $2
            LIMIT 1
        """
        row = await self.db.fetchrow(query, user_id, content_id)
        return dict(row) if row else None

    async def create(self, favorite_id: str, user_id: str, content_id: str, added_on: date) -> dict:
        query = """
            INSERT INTO "Favoritos" (id_favorito, id_usuario, id_contenido, fecha_agregado)
            VALUES ($1, $2, $3, $4)
            RETURNING *
        """
        row = await self.db.fetchrow(query, favorite_id, user_id, content_id, added_on)
        return dict(row)

    async def delete(self, user_id: str, content_id: str):
        query = 'DELETE FROM "Favoritos" WHERE id_usuario = $1 AND id_contenido = $2'
        await self.db.execute(query, user_id, content_id)

    async def list_by_user(self, user_id: str) -> List[dict]:
        query = """
            SELECT
                f.*,
                c.id_contenido AS c__id_contenido,
                c.id_externo AS c__id_externo,
                c.titulo AS c__titulo,
                c.descripcion AS c__descripcion,
                c.duracion AS c__duracion,
                c.tipo AS c__tipo,
                c.fecha AS c__fecha,
                c.calificacion AS c__calificacion,
                c.poster AS c__poster,
                c.genero AS c__genero
            FROM "Favoritos" f
            LEFT JOIN "Contenido" c ON c.id_contenido = f.id_contenido
            WHERE f.id_usuario = $1
            ORDER BY f.fecha_agregado DESC
        """
        rows = await self.db.fetch(query, user_id)
        return [nest(dict(row), "c__", "Contenido") for row in rows]
