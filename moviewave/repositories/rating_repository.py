from datetime import date
from typing import Any, Dict, List, Optional

from asyncpg import Pool

from .sql import nest, set_clause

UPDATABLE_COLUMNS = ("puntuacion", "comentario", "fecha")


class RatingRepository:
    def __init__(self, db: Pool):
        self.db = db

    async def get(self, user_id: str, content_id: str) -> Optional[dict]:
        query = """
            SELECT *
            FROM "Calificaciones"
            WHERE id_usuario = $1 AND id_contenido = $2
            LIMIT 1
        """
        row = await self.db.fetchrow(query, user_id, content_id)
        return dict(row) if row else None

    async def create(
        self,
        rating_id: str,
        user_id: str,
        content_id: str,
        puntuacion: Optional[int],
        comentario: Optional[str],
        fecha: date,
    ) -> dict:
        query = """
            INSERT INTO "Calificaciones" (
                id_calificacion,
                id_usuario,
                id_contenido,
                puntuacion,
                comentario,
                fecha
            ) VALUES ($1, $2, $3, $4, $5, $6)
            RETURNING *
        """
        row = await self.db.fetchrow(query, rating_id, user_id, content_id, puntuacion, comentario, fecha)
        return dict(row)

    async def update(self, rating_id: str, fields: Dict[str, Any]) -> dict:
        """Overwrite only the given columns."""
        assignments, values = set_clause(fields, UPDATABLE_COLUMNS, start=2)
        query = f'UPDATE "Calificaciones" SET {assignments} WHERE id_calificacion = $1 RETURNING *'
        row = await self.db.fetchrow(query, rating_id, *values)
        return dict(row)

    async def list_by_user(self, user_id: str) -> List[dict]:
        query = """
            SELECT
                r.*,
                c.id_contenido AS c__id_contenido,
                c.id_externo AS c__id_externo,
                c.titulo AS c__titulo,
                c.descripcion AS c__descripcion,
                c.duracion AS c__duracion,
                c.tipo AS c__tipo,
                c.fecha AS c__fecha,
                c.calificacion AS c__calificacion
            FROM "Calificaciones" r
            LEFT JOIN "Contenido" c ON c.id_contenido = r.id_contenido
            WHERE r.id_usuario = $1
            ORDER BY r.fecha DESC
        """
        rows = await self.db.fetch(query, user_id)
        return [nest(dict(row), "c__", "Contenido") for row in rows]

    async def list_by_content(self, content_id: str) -> List[dict]:
        query = """
            SELECT
                r.*,
                u.correo AS u__email
            FROM "Calificaciones" r
            LEFT JOIN "Usuario" u ON u.id_usuario = r.id_usuario
            WHERE r.id_contenido = $1
            ORDER BY r.fecha DESC
        """
        rows = await self.db.fetch(query, content_id)
        return [nest(dict(row), "u__", "User") for row in rows]

    async def delete(self, user_id: str, content_id: str):
        query = 'DELETE FROM "Calificaciones" WHERE id_usuario = $1 AND id_contenido = $2'
        await self.db.execute(query, user_id, content_id)
