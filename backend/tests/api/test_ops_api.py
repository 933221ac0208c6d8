import pytest

from advocates_api.settings import settings


@pytest.mark.asyncio
async def test_liveness(api_client):
	response = await api_client.get("/health/live")

	assert response.status_code == 200
	assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_readiness_with_memory_backend(api_client):
	response = await api_client.get("/health/ready")

	assert response.status_code == 200
	assert response.json()["checks"]["store"]["backend"] == "memory"


@pytest.mark.asyncio
async def test_metrics_require_admin_token(api_client):
	response = await api_client.get("/metrics")

	assert response.status_code == 403
	assert response.json()["detail"] == "admin_token_not_configured"


@pytest.mark.asyncio
async def test_metrics_with_admin_token(api_client):
	settings.obs_admin_token = "ops-token"

	denied = await api_client.get("/metrics", headers={"X-Admin-Token": "wrong"})
	allowed = await api_client.get("/metrics", headers={"Authorization": "Bearer ops-token"})

	assert denied.status_code == 403
	assert allowed.status_code == 200
	assert "advocates_http_requests_total" in allowed.text


@pytest.mark.asyncio
async def test_metrics_public_flag(api_client):
	settings.obs_metrics_public = True

	await api_client.get("/api/advocates")
	response = await api_client.get("/metrics")

	assert response.status_code == 200
	assert "advocates_search_queries_total" in response.text
