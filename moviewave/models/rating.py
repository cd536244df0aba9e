from sqlalchemy import Column, String, Date, SmallInteger, Text, ForeignKey, UniqueConstraint, CheckConstraint
from sqlalchemy.dialects.postgresql import UUID

from .base import Base


class RatingDB(Base):
    __tablename__ = "Calificaciones"
    __table_args__ = (
        UniqueConstraint("id_usuario", "id_contenido", name="uq_calificaciones_usuario_contenido"),
        CheckConstraint("puntuacion IS NULL OR puntuacion BETWEEN 1 AND 5", name="ck_calificaciones_puntuacion"),
    )

    id_calificacion = Column(UUID(as_uuid=True), primary_key=True)
    id_usuario = Column(UUID(as_uuid=True), nullable=False, index=True)
    id_contenido = Column(UUID(as_uuid=True), ForeignKey("Contenido.id_contenido"), nullable=False)
    puntuacion = Column(SmallInteger)
    comentario = Column(Text)
    fecha = Column(Date)
