"""Pytest configuration and fixtures."""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from physioflow.client.cache import QueryCache
from physioflow.client.http import ApiClient
from physioflow.observability import ObservabilityLogger
from physioflow.offline.models import Base
from physioflow.resources import PhysioFlowClient

BASE_URL = "http://testserver/api"


# ---------------------------------------------------------------------------
# Stub PhysioFlow API served in-process through httpx.ASGITransport
# ---------------------------------------------------------------------------

@dataclass
class RecordedRequest:
    method: str
    path: str
    params: dict[str, str]
    body: Any
    headers: dict[str, str] = field(default_factory=dict)


class StubApi:
    """Stand-in for the PhysioFlow REST API.

    Tests register canned responses with ``on()``; unregistered routes answer
    404. Every request is recorded in ``requests``.
    """

    def __init__(self):
        self.routes: dict[tuple[str, str], tuple[int, Any, dict[str, str]]] = {}
        self.requests: list[RecordedRequest] = []
        self.app = FastAPI()

        @self.app.api_route("/api/{path:path}", methods=["GET", "POST", "PUT", "PATCH", "DELETE"])
        async def handle(path: str, request: Request) -> Response:
            raw = await request.body()
            self.requests.append(
                RecordedRequest(
                    method=request.method,
                    path="/" + path,
                    params=dict(request.query_params),
                    body=json.loads(raw) if raw else None,
                    headers=dict(request.headers),
                )
            )

            route = self.routes.get((request.method, "/" + path))
            if route is None:
                return JSONResponse({"message": "Not found", "code": "not_found"}, status_code=404)

            status, content, headers = route
            if isinstance(content, bytes):
                return Response(content, status_code=status, headers=headers)
            if content is None:
                return Response(status_code=status, headers=headers)
            return JSONResponse(content, status_code=status, headers=headers)

    def on(
        self,
        method: str,
        path: str,
        json: Any = None,
        status: int = 200,
        content: Optional[bytes] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> None:
        body = content if content is not None else json
        self.routes[(method.upper(), path)] = (status, body, headers or {})

    def calls(self, method: str, path: str) -> list[RecordedRequest]:
        return [r for r in self.requests if r.method == method.upper() and r.path == path]

    @property
    def last(self) -> RecordedRequest:
        return self.requests[-1]


@pytest.fixture(autouse=True)
def quiet_observability():
    """Keep the global observability logger from writing files during tests."""
    previous = ObservabilityLogger._instance
    ObservabilityLogger._instance = ObservabilityLogger(enabled=False)
    yield
    ObservabilityLogger._instance = previous


@pytest.fixture
def stub_api():
    return StubApi()


@pytest.fixture
def obs(tmp_path: Path):
    """Enabled observability logger writing under a temp dir."""
    return ObservabilityLogger(log_dir=tmp_path / "logs")


@pytest.fixture
def cache():
    return QueryCache()


@pytest_asyncio.fixture
async def api(stub_api, obs):
    client = ApiClient(
        base_url=BASE_URL,
        token="test-token",
        transport=httpx.ASGITransport(app=stub_api.app),
        observability=obs,
    )
    yield client
    await client.aclose()


@pytest_asyncio.fixture
async def client(api, cache):
    yield PhysioFlowClient(api, cache)


# ---------------------------------------------------------------------------
# Offline queue database: in-memory SQLite
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def engine():
    eng = create_async_engine("sqlite+aiosqlite://", echo=False)
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


# ---------------------------------------------------------------------------
# Payload builders (snake_case, as the API sends them)
# ---------------------------------------------------------------------------

def patient_payload(**overrides) -> dict:
    data = {
        "id": "p-1",
        "clinic_id": "c-1",
        "mrn": "MRN-0001",
        "first_name": "An",
        "last_name": "Nguyen",
        "first_name_vi": "An",
        "last_name_vi": "Nguyễn",
        "date_of_birth": "1980-05-01",
        "gender": "male",
        "phone": "0912345678",
        "email": "an@example.com",
        "is_active": True,
        "created_at": "2024-01-01T00:00:00Z",
        "updated_at": "2024-01-02T00:00:00Z",
    }
    data.update(overrides)
    return data


def checklist_payload(responses: Optional[dict] = None, required_b: bool = True) -> dict:
    """Visit checklist with two sections: two required items and one optional."""
    return {
        "id": "cl-1",
        "visit_id": "v-1",
        "template_id": "t-1",
        "patient_id": "p-1",
        "template": {
            "id": "t-1",
            "name": "Lumbar follow-up",
            "target_duration_minutes": 10,
            "sections": [
                {
                    "id": "s-1",
                    "title": "Subjective",
                    "items": [
                        {"id": "pain", "label": "Pain", "input_type": "pain_scale", "required": True},
                        {"id": "notes", "label": "Notes", "input_type": "text", "required": False},
                    ],
                },
                {
                    "id": "s-2",
                    "title": "Objective",
                    "items": [
                        {"id": "rom", "label": "ROM", "input_type": "rom", "required": required_b},
                    ],
                },
            ],
        },
        "responses": responses or {},
        "status": "in_progress",
    }


@pytest.fixture
def make_patient():
    return patient_payload


@pytest.fixture
def make_checklist():
    return checklist_payload
