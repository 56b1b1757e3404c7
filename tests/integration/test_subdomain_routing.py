"""Integration tests for host-based routing to tenant pages."""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient


@pytest_asyncio.fixture
async def tenant_client(test_app, registered_account) -> AsyncGenerator[AsyncClient, None]:
    """Client addressed to the registered trainer's subdomain."""
    subdomain = registered_account["trainer"]["subdomain"]
    async with AsyncClient(
        transport=ASGITransport(app=test_app),
        base_url=f"http://{subdomain}.trainerdesk.com",
    ) as client:
        yield client


@pytest.mark.asyncio
class TestTenantPages:
    async def test_tenant_root_shows_public_page(self, tenant_client, registered_account):
        response = await tenant_client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["subdomain"] == "joe-s-fitness"
        assert data["business_name"] == "Joe's Fitness"
        assert data["timezone"] == "America/New_York"
        assert data["timezone_label"] == "Eastern Time (ET) (UTC-5)"

    async def test_any_path_on_tenant_host_shows_page(self, tenant_client, registered_account):
        response = await tenant_client.get("/about/team")

        assert response.status_code == 200
        assert response.json()["subdomain"] == "joe-s-fitness"

    async def test_tenant_host_with_port(self, test_app, registered_account):
        async with AsyncClient(
            transport=ASGITransport(app=test_app),
            base_url="http://joe-s-fitness.trainerdesk.com:3000",
        ) as client:
            response = await client.get("/")

        assert response.status_code == 200

    async def test_unknown_tenant_is_not_found(self, test_app):
        async with AsyncClient(
            transport=ASGITransport(app=test_app),
            base_url="http://nobody-here.trainerdesk.com",
        ) as client:
            response = await client.get("/")

        assert response.status_code == 404
        body = response.json()
        assert body["error_code"] == "tenant_not_found"
        assert body["request_id"] == response.headers["X-Request-ID"]

    async def test_tenant_host_cannot_reach_api(self, tenant_client, registered_account):
        """Test API paths on a tenant host are rewritten too."""
        response = await tenant_client.post(
            "/api/auth/login", json={"email": "x@y.io", "password": "whatever"}
        )

        assert response.status_code == 405

    async def test_health_is_not_rewritten(self, tenant_client):
        response = await tenant_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


@pytest.mark.asyncio
class TestMainSite:
    async def test_www_is_not_a_tenant(self, test_client, registered_account):
        response = await test_client.get("/")

        assert response.status_code == 404
        assert response.json()["detail"] == "Not Found"

    async def test_apex_domain_is_not_a_tenant(self, test_app):
        async with AsyncClient(
            transport=ASGITransport(app=test_app), base_url="http://trainerdesk.com"
        ) as client:
            response = await client.get("/health")

        assert response.status_code == 200

    async def test_page_path_is_reachable_directly(self, test_client, registered_account):
        response = await test_client.get("/pages/joe-s-fitness")

        assert response.status_code == 200
        assert response.json()["business_name"] == "Joe's Fitness"


@pytest.mark.asyncio
class TestRequestHeaders:
    async def test_request_id_header(self, test_client):
        response = await test_client.get("/health")

        assert "X-Request-ID" in response.headers
        assert "X-Correlation-ID" in response.headers

    async def test_correlation_id_is_propagated(self, test_client):
        correlation_id = "01947a2b-0000-7000-8000-000000000001"

        response = await test_client.get("/health", headers={"X-Correlation-ID": correlation_id})

        assert response.headers["X-Correlation-ID"] == correlation_id

    async def test_invalid_correlation_id_is_replaced(self, test_client):
        response = await test_client.get("/health", headers={"X-Correlation-ID": "nonsense"})

        assert response.headers["X-Correlation-ID"] != "nonsense"
