from typing import Any, Dict

from pydantic import BaseModel, ConfigDict

from .common import ExternalContentId


class FavoriteRequest(BaseModel):
    """Body of POST /api/favorites; the user always comes from the bearer token."""
    model_config = ConfigDict(extra="forbid")

    id_contenido: ExternalContentId


class FavoriteResult(BaseModel):
    message: str
    favorito: Dict[str, Any]


class FavoriteStatus(BaseModel):
    isFavorite: bool
