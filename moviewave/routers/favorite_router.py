from typing import Any, Dict, List

from fastapi import APIRouter, Depends, status

from ..dependencies import get_current_user_id, get_db_pool
from ..repositories.content_repository import ContentRepository
from ..repositories.favorite_repository import FavoriteRepository
from ..schemas.favorite import FavoriteRequest, FavoriteResult, FavoriteStatus
from ..services.content_service import ContentService
from ..services.favorite_service import FavoriteService

router = APIRouter(prefix="/api/favorites", tags=["favorites"])


async def get_favorite_service(db = Depends(get_db_pool)) -> FavoriteService:
    return FavoriteService(FavoriteRepository(db), ContentService(ContentRepository(db)))


@router.post("", status_code=status.HTTP_201_CREATED, response_model=FavoriteResult)
async def add_favorite(
    body: FavoriteRequest,
    user_id: str = Depends(get_current_user_id),
    service: FavoriteService = Depends(get_favorite_service)
):
    favorite = await service.add(user_id, body.id_contenido)
    return {"message": "Favorite added", "favorito": favorite}


@router.get("/check/{content_id}", response_model=FavoriteStatus)
async def check_favorite(
    content_id: str,
    user_id: str = Depends(get_current_user_id),
    service: FavoriteService = Depends(get_favorite_service)
):
    return {"isFavorite": await service.check(user_id, content_id)}


@router.get("/my-favorites", response_model=List[Dict[str, Any]])
async def get_my_favorites(
    user_id: str = Depends(get_current_user_id),
    service: FavoriteService = Depends(get_favorite_service)
):
    return await service.list(user_id)


@router.delete("/{content_id}")
async def remove_favorite(
    content_id: str,
    user_id: str = Depends(get_current_user_id),
    service: FavoriteService = Depends(get_favorite_service)
):
    """Remove a favorite; removing one that does not exist also succeeds"""
    await service.remove(user_id, content_id)
    return {"message": "Favorite removed"}
