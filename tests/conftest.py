"""Root conftest: shared route table, FastAPI app and async HTTP client.

Invariants:
    - Every test gets a fresh FastAPI app with the compiled router mounted
    - Settings cache cleared around each test so env overrides never leak

Design Decisions:
    - httpx AsyncClient over ASGITransport: exercises the real ASGI stack
      without a network socket
"""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel, EmailStr, Field

from schema_router import define_routes, get_settings, get_validated, schema_router


class CreateUser(BaseModel):
    name: str
    email: EmailStr


class SearchQuery(BaseModel):
    q: str


class UserParams(BaseModel):
    id: str = Field(pattern=r"^\d+$")


async def create_user(request):
    return {"user": get_validated(request).body}


async def search(request):
    return {"q": get_validated(request).query.q}


async def get_user(request):
    return {"id": get_validated(request).params.id}


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def routes():
    return define_routes({
        "POST /users": {"body": CreateUser, "handler": create_user},
        "GET /search": {"query": SearchQuery, "handler": search},
        "GET /users/{id}": {"params": UserParams, "handler": get_user},
    })


@pytest.fixture
def app(routes):
    app = FastAPI()
    app.include_router(schema_router(routes))
    return app


@pytest.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
