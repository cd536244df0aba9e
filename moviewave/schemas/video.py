from typing import Optional, Union

from pydantic import BaseModel


class VideoCard(BaseModel):
    """Single Pexels video reshaped for the catalog grid"""
    id: Union[int, str]
    title: str
    genre: str
    year: int
    poster: Optional[str] = None
    videoUrl: Optional[str] = None
