from datetime import date
from typing import Any, Dict, Optional

from asyncpg import Pool

from .sql import set_clause

PROFILE_COLUMNS = ("nombre", "apellido", "correo", "edad")


class UserRepository:
    def __init__(self, db: Pool):
        self.db = db

    async def get_by_id(self, user_id: str) -> Optional[dict]:
        query = 'SELECT * FROM "Usuario" WHERE id_usuario = $1'
        row = await self.db.fetchrow(query, user_id)
        return dict(row) if row else None

    async def upsert_profile(
        self,
        user_id: str,
        nombre: Optional[str],
        apellido: Optional[str],
        correo: str,
        edad: Optional[date],
    ) -> dict:
        # A database trigger may already have created the row from auth metadata
        query = """
            INSERT INTO "Usuario" (id_usuario, nombre, apellido, correo, edad)
            VALUES ($1, $2, $3, $4, $5)
            ON CONFLICT (id_usuario) DO UPDATE SET
                nombre = EXCLUDED.nombre,
                apellido = EXCLUDED.apellido,
                correo = EXCLUDED.correo,
                edad = EXCLUDED.edad
            RETURNING *
        """
        row = await self.db.fetchrow(query, user_id, nombre, apellido, correo, edad)
        return dict(row)

    async def update_profile(self, user_id: str, fields: Dict[str, Any]) -> Optional[dict]:
        if not fields:
            return await self.get_by_id(user_id)
        assignments, values = set_clause(fields, PROFILE_COLUMNS, start=2)
        query = f'UPDATE "Usuario" SET {assignments} WHERE id_usuario = $1 RETURNING *'
        row = await self.db.fetchrow(query, user_id, *values)
        return dict(row) if row else None

    async def delete(self, user_id: str):
        await self.db.execute('DELETE FROM "Usuario" WHERE id_usuario = $1', user_id)
