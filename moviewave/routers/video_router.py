from typing import List, Optional

from fastapi import APIRouter, Depends

from ..config import Settings, get_settings
from ..dependencies import get_pexels_client
from ..schemas.video import VideoCard
from ..services.video_service import VideoCatalogService

router = APIRouter(prefix="/videos", tags=["videos"])


async def get_video_service(pexels = Depends(get_pexels_client)) -> VideoCatalogService:
    return VideoCatalogService(pexels)


@router.get("/search", response_model=List[VideoCard])
async def search_videos(
    query: Optional[str] = None,
    service: VideoCatalogService = Depends(get_video_service)
):
    """
    Search Pexels videos.
    Without a query (or with "popular") returns a mix of the popular genres.
    """
    return await service.search(query)


@router.get("/health")
async def videos_health(settings: Settings = Depends(get_settings)):
    return {
        "status": "OK",
        "message": "Video routes are working",
        "pexelsKey": "configured" if settings.PEXELS_API_KEY else "missing",
    }
