from sqlalchemy import Column, String, Date
from sqlalchemy.dialects.postgresql import UUID

from .base import Base


class UserDB(Base):
    """
    Profile row for an auth platform account.
    id_usuario is the uid issued by Supabase auth, not generated here.
    """
    __tablename__ = "Usuario"

    id_usuario = Column(UUID(as_uuid=True), primary_key=True)
    nombre = Column(String)
    apellido = Column(String)
    correo = Column(String, index=True)
    edad = Column(Date)  # birth date, the column name is historical
