from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from ..dependencies import get_current_user_id, get_db_pool
from ..repositories.content_repository import ContentRepository
from ..repositories.rating_repository import RatingRepository
from ..schemas.rating import RatingRequest, RatingResult, UserRatingStatus
from ..services.content_service import ContentService
from ..services.rating_service import RatingService

router = APIRouter(prefix="/api/ratings", tags=["ratings"])


async def get_rating_service(db = Depends(get_db_pool)) -> RatingService:
    return RatingService(RatingRepository(db), ContentService(ContentRepository(db)))


@router.post("", response_model=RatingResult)
async def add_rating(
    rating: RatingRequest,
    user_id: str = Depends(get_current_user_id),
    service: RatingService = Depends(get_rating_service)
):
    """
    Add or update the caller's rating for a Pexels video.
    Only the fields present in the body are written.
    """
    row, created = await service.upsert(user_id, rating)
    return {
        "message": "Rating added" if created else "Rating updated",
        "calificacion": row,
    }


@router.get("/user/{content_id}", response_model=UserRatingStatus)
async def get_user_rating(
    content_id: str,
    user_id: str = Depends(get_current_user_id),
    service: RatingService = Depends(get_rating_service)
):
    return await service.get_user_rating(user_id, content_id)


@router.get("/my-ratings", response_model=List[Dict[str, Any]])
async def get_my_ratings(
    user_id: str = Depends(get_current_user_id),
    service: RatingService = Depends(get_rating_service)
):
    return await service.list_user_ratings(user_id)


@router.get("/content/{content_id}", response_model=List[Dict[str, Any]])
async def get_content_ratings(
    content_id: str,
    service: RatingService = Depends(get_rating_service)
):
    """Public list of every rating for a Pexels video"""
    return await service.list_content_ratings(content_id)


@router.delete("/{content_id}")
async def delete_rating(
    content_id: str,
    user_id: str = Depends(get_current_user_id),
    service: RatingService = Depends(get_rating_service)
):
    await service.delete_rating(user_id, content_id)
    return {"message": "Rating deleted"}
