from sqlalchemy import Column, String, Date, Float, Text
from sqlalchemy.dialects.postgresql import UUID

from .base import Base


class ContentDB(Base):
    """
    ORM Model - Mapping 1-1 with table 'Contenido' in Postgres.
    Rows are created lazily the first time a provider video is rated or favorited.
    """
    __tablename__ = "Contenido"

    id_contenido = Column(UUID(as_uuid=True), primary_key=True)
    id_externo = Column(String(100), index=True)  # Pexels video id, no unique constraint
    titulo = Column(String(255), nullable=False)
    descripcion = Column(Text)
    tipo = Column(String(50), default="video")
    fecha = Column(Date)
    duracion = Column(String(20), default="00:00")
    calificacion = Column(Float, default=0)
    poster = Column(String(500))
    genero = Column(String(100))
