import asyncio
import os
import random
import re
import sys
import tempfile
from pathlib import Path

import httpx
import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

TEST_DB_DIR = tempfile.mkdtemp(prefix="movies-backend-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{TEST_DB_DIR}/test.db"
os.environ["TMDB_KEY"] = "test-tmdb-key"
os.environ.setdefault("JWT_SECRET", "test-jwt")

from fastapi.testclient import TestClient

from movies_backend.main import app
from movies_backend.services.ranker import get_rng
from movies_backend.utils.clients import CatalogClient, get_catalog_client
from movies_backend.utils.database import create_tables, drop_tables

FIGHT_CLUB = {
    "id": 550,
    "adult": False,
    "backdrop_path": "/hZkgoQYus5vegHoetLkCJzb17zJ.jpg",
    "genres": [{"id": 18, "name": "Drama"}, {"id": 53, "name": "Thriller"}],
    "original_language": "en",
    "original_title": "Fight Club",
    "overview": "A ticking-time-bomb insomniac and a slippery soap salesman channel primal male aggression.",
    "popularity": 61.416,
    "poster_path": "/pB8BM7pdSp6B6Ih7QZ4DrQ3PmJK.jpg",
    "release_date": "1999-10-15",
    "title": "Fight Club",
    "video": False,
    "vote_average": 8.4,
    "vote_count": 26280,
}

PRINCESS_MONONOKE = {
    "id": 128,
    "adult": False,
    "backdrop_path": "/cMYCDADoLKLbB83g4WnJegaZimC.jpg",
    "genres": [{"id": 12, "name": "Adventure"}, {"id": 14, "name": "Fantasy"}, {"id": 16, "name": "Animation"}],
    "original_language": "ja",
    "original_title": "もののけ姫",
    "overview": "Ashitaka, a prince of the disappearing Emishi people, is cursed by a demonized boar god.",
    "popularity": 74.39,
    "poster_path": "/cMYCDADoLKLbB83g4WnJegaZimC.jpg",
    "release_date": "1997-07-12",
    "title": "Princess Mononoke",
    "video": False,
    "vote_average": 8.3,
    "vote_count": 7511,
}

POPULAR = [
    {"id": 1, "title": "Popular One", "genre_ids": [28], "popularity": 900.1},
    {"id": 2, "title": "Popular Two", "genre_ids": [35, 18], "popularity": 810.5},
    {"id": 3, "title": "Popular Three", "genre_ids": [], "popularity": 700.0},
]


class FakeTMDB:
    """Serves canned TMDB responses through httpx.MockTransport and records every request."""

    def __init__(self):
        self.movies = {550: dict(FIGHT_CLUB), 128: dict(PRINCESS_MONONOKE)}
        self.popular = [dict(m) for m in POPULAR]
        self.down = False
        self.malformed_listing = False
        self.requests = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.down:
            return httpx.Response(503, json={"status_message": "Service unavailable"})
        path = request.url.path.removeprefix("/3")
        if self.malformed_listing and path in ("/movie/popular", "/search/movie"):
            return httpx.Response(200, json=[{"id": 1}])
        if path == "/movie/popular":
            return httpx.Response(200, json={"page": 1, "results": self.popular})
        if path == "/search/movie":
            query = request.url.params.get("query", "").lower()
            listed = [
                {k: v for k, v in m.items() if k != "genres"} | {"genre_ids": [g["id"] for g in m["genres"]]}
                for m in self.movies.values()
            ]
            return httpx.Response(200, json={"page": 1, "results": [m for m in listed if query in m["title"].lower()]})
        match = re.fullmatch(r"/movie/(\d+)", path)
        if match and int(match.group(1)) in self.movies:
            return httpx.Response(200, json=self.movies[int(match.group(1))])
        return httpx.Response(404, json={"status_code": 34, "status_message": "The resource you requested could not be found."})


def run(coro):
    return asyncio.run(coro)


async def _reset_database():
    await drop_tables()
    await create_tables()


@pytest.fixture(autouse=True)
def fresh_database():
    run(_reset_database())
    yield


@pytest.fixture()
def fake_tmdb():
    return FakeTMDB()


@pytest.fixture()
def catalog(fake_tmdb):
    return CatalogClient("test-tmdb-key", transport=httpx.MockTransport(fake_tmdb.handler))


@pytest.fixture()
def client(catalog):
    app.dependency_overrides[get_catalog_client] = lambda: catalog
    app.dependency_overrides[get_rng] = lambda: random.Random(1234)
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def register_and_login(client):
    """Register a user and return (user_id, auth headers)."""

    def _register_and_login(email="alice@example.com", password="Secret123!"):
        response = client.post(
            "/api/auth/register",
            json={"email": email, "firstName": "Alice", "lastName": "Liddell", "password": password},
        )
        assert response.status_code == 201
        user_id = response.json()["userId"]
        response = client.post("/api/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200
        return user_id, {"Authorization": f"Bearer {response.json()['token']}"}

    return _register_and_login
