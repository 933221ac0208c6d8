import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Ensure backend package is importable when tests run from repo root
BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
	sys.path.insert(0, str(BACKEND_ROOT))

from advocates_api.domain.advocates import models
from advocates_api.domain.advocates.store import reset_memory_state
from advocates_api.infra import postgres
from advocates_api.main import app
from advocates_api.settings import settings

BASE_TIME = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


def make_advocate(
	advocate_id: int,
	first_name: str,
	last_name: str,
	city: str,
	degree: str,
	specialties,
	years_of_experience: int,
	*,
	phone_number: int = 5550000000,
	created_offset_minutes: int | None = None,
) -> models.MemoryAdvocate:
	offset = advocate_id if created_offset_minutes is None else created_offset_minutes
	return models.MemoryAdvocate(
		id=advocate_id,
		first_name=first_name,
		last_name=last_name,
		city=city,
		degree=degree,
		specialties=specialties,
		years_of_experience=years_of_experience,
		phone_number=phone_number + advocate_id,
		created_at=BASE_TIME + timedelta(minutes=offset),
	)


@pytest.fixture
def advocate_factory():
	return make_advocate


@pytest.fixture
def directory() -> list[models.MemoryAdvocate]:
	"""A small directory mixing list and bare-string specialties."""
	return [
		make_advocate(1, "Ann", "Lee", "Boston", "MD", ["trauma"], 5),
		make_advocate(2, "Bo", "Han", "Boston", "PhD", ["coaching", "trauma"], 10),
		make_advocate(3, "Carla", "Annandale", "Cambridge", "MSW", "Trauma & PTSD", 2),
		make_advocate(4, "Dev", "Patel", "New Boston", "MD", ["Eating disorders", "ADHD"], 15),
		make_advocate(5, "Eve", "Brown", "Chicago", "PhD", "ADHD", 7),
		make_advocate(6, "Frank", "Adams", "Chicago", "MD", [], 10),
	]


@pytest_asyncio.fixture(autouse=True)
async def clear_memory_state():
	await reset_memory_state()
	yield
	await reset_memory_state()


@pytest.fixture(autouse=True)
def patch_postgres(monkeypatch):
	async def _noop():
		return None

	monkeypatch.setattr(postgres, "init_pool", _noop)
	monkeypatch.setattr(postgres, "close_pool", _noop)


@pytest.fixture(autouse=True)
def force_test_settings():
	"""Serve searches from the in-memory store and keep metrics private."""
	original_backend = settings.search_backend
	original_environment = settings.environment
	original_metrics_public = settings.obs_metrics_public
	original_admin_token = settings.obs_admin_token
	settings.search_backend = "memory"
	settings.environment = "dev"
	settings.obs_metrics_public = False
	settings.obs_admin_token = None
	try:
		yield
	finally:
		settings.search_backend = original_backend
		settings.environment = original_environment
		settings.obs_metrics_public = original_metrics_public
		settings.obs_admin_token = original_admin_token


@pytest_asyncio.fixture
async def api_client():
	transport = ASGITransport(app=app)
	async with AsyncClient(transport=transport, base_url="http://testserver") as client:
		yield client
