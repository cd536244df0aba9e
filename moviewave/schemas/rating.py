from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, model_validator

from .common import ExternalContentId

RATING_FIELDS = ("puntuacion", "comentario")


class RatingRequest(BaseModel):
    """Body of POST /api/ratings. Omitted fields keep their stored value."""
    model_config = ConfigDict(extra="forbid")

    id_contenido: ExternalContentId
    # bools and floats are not scores
    puntuacion: Optional[StrictInt] = Field(None, ge=1, le=5)
    comentario: Optional[str] = Field(None, max_length=2000)

    @model_validator(mode="after")
    def require_score_or_comment(self):
        if not self.model_fields_set.intersection(RATING_FIELDS):
            raise ValueError("puntuacion or comentario is required")
        return self

    def supplied_fields(self) -> Dict[str, Any]:
        """Only the rating fields present in the request body."""
        return {name: getattr(self, name) for name in RATING_FIELDS if name in self.model_fields_set}


class RatingResult(BaseModel):
    message: str
    calificacion: Dict[str, Any]


class UserRatingStatus(BaseModel):
    hasRating: bool
    calificacion: Optional[Dict[str, Any]] = None
