from datetime import date

import httpx
import pytest

from moviewave.clients.pexels import PexelsClient
from moviewave.exceptions import ConfigurationError, UpstreamFailure
from moviewave.services.video_service import (
    PER_GENRE_LIMIT,
    POPULAR_GENRES,
    SEARCH_LIMIT,
    VideoCatalogService,
    to_card,
)


def pexels_video(video_id, author="Jane Doe"):
    return {
        "id": video_id,
        "image": f"https://images.pexels.com/videos/{video_id}/preview.jpg",
        "user": {"name": author},
        "video_files": [{"link": f"https://player.pexels.com/{video_id}.mp4"}],
    }


def make_service(handler):
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return VideoCatalogService(PexelsClient(http, "pexels-key")), http


@pytest.mark.asyncio
async def test_search_literal_term():
    calls = []

    def handler(request: httpx.Request):
        calls.append(request)
        return httpx.Response(200, json={"videos": [pexels_video(1), pexels_video(2)]})

    service, http = make_service(handler)
    async with http:
        cards = await service.search("  Comedy ")

    assert len(calls) == 1
    assert calls[0].url.params["query"] == "comedy"
    assert calls[0].url.params["per_page"] == str(SEARCH_LIMIT)
    assert calls[0].headers["Authorization"] == "pexels-key"
    assert [c["id"] for c in cards] == [1, 2]
    assert all(c["genre"] == "comedy" for c in cards)
    assert cards[0]["year"] == date.today().year


@pytest.mark.asyncio
@pytest.mark.parametrize("query", [None, "", "   ", "popular", "POPULAR"])
async def test_popular_queries_every_genre(query):
    seen = []

    def handler(request: httpx.Request):
        genre = request.url.params["query"]
        seen.append((genre, request.url.params["per_page"]))
        return httpx.Response(200, json={"videos": [pexels_video(f"{genre}-1")]})

    service, http = make_service(handler)
    async with http:
        cards = await service.search(query)

    assert sorted(g for g, _ in seen) == sorted(POPULAR_GENRES)
    assert all(per_page == str(PER_GENRE_LIMIT) for _, per_page in seen)
    assert {c["genre"] for c in cards} == set(POPULAR_GENRES)


@pytest.mark.asyncio
async def test_popular_survives_failing_genre():
    def handler(request: httpx.Request):
        genre = request.url.params["query"]
        if genre == "horror":
            return httpx.Response(503, json={"error": "unavailable"})
        return httpx.Response(200, json={"videos": [pexels_video(f"{genre}-1")]})

    service, http = make_service(handler)
    async with http:
        cards = await service.search("popular")

    genres = {c["genre"] for c in cards}
    assert "horror" not in genres
    assert genres == set(POPULAR_GENRES) - {"horror"}


@pytest.mark.asyncio
async def test_literal_search_failure():
    service, http = make_service(lambda request: httpx.Response(429, json={"error": "rate limited"}))
    async with http:
        with pytest.raises(UpstreamFailure) as exc:
            await service.search("comedy")
    assert exc.value.message == "Error loading videos"


@pytest.mark.asyncio
async def test_missing_key_makes_no_request():
    service = VideoCatalogService(None)
    with pytest.raises(ConfigurationError):
        await service.search("comedy")


def test_to_card_fallbacks():
    card = to_card({"id": 9, "user": None, "video_files": []}, "action", 2024)

    assert card == {
        "id": 9,
        "title": "untitled",
        "genre": "action",
        "year": 2024,
        "poster": None,
        "videoUrl": None,
    }


def test_to_card_uses_first_file():
    video = pexels_video(3, author="Ana")
    video["video_files"].append({"link": "https://player.pexels.com/other.mp4"})

    card = to_card(video, "drama", 2025)
    assert card["title"] == "Ana"
    assert card["videoUrl"] == "https://player.pexels.com/3.mp4"


@pytest.mark.asyncio
async def test_popular_survives_malformed_genre_payload():
    def handler(request: httpx.Request):
        genre = request.url.params["query"]
        if genre == "horror":
            return httpx.Response(200, json={"videos": [{"id": 1, "video_files": [None]}]})
        return httpx.Response(200, json={"videos": [pexels_video(f"{genre}-1")]})

    service, http = make_service(handler)
    async with http:
        cards = await service.search("popular")

    assert {c["genre"] for c in cards} == set(POPULAR_GENRES) - {"horror"}


@pytest.mark.asyncio
async def test_literal_search_malformed_payload():
    service, http = make_service(lambda request: httpx.Response(200, json=["not", "an", "object"]))
    async with http:
        with pytest.raises(UpstreamFailure):
            await service.search("comedy")


@pytest.mark.asyncio
async def test_items_without_id_are_skipped():
    def handler(request: httpx.Request):
        no_id = pexels_video(None)
        return httpx.Response(200, json={"videos": [no_id, pexels_video(7)]})

    service, http = make_service(handler)
    async with http:
        cards = await service.search("comedy")

    assert [c["id"] for c in cards] == [7]
