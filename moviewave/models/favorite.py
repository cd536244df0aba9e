from sqlalchemy import Column, Date, ForeignKey
from sqlalchemy.dialects.postgresql import UUID

from .base import Base


class FavoriteDB(Base):
    # No unique constraint: duplicates are prevented by the check in FavoriteService.add
    __tablename__ = "Favoritos"

    id_favorito = Column(UUID(as_uuid=True), primary_key=True)
    id_usuario = Column(UUID(as_uuid=True), nullable=False, index=True)
    id_contenido = Column(UUID(as_uuid=True), ForeignKey("Contenido.id_contenido"), nullable=False)
    fecha_agregado = Column(Date)
