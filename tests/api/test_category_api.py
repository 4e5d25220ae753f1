"""API tests for Category endpoints."""

import pytest
from httpx import AsyncClient


class TestCategoryAPI:
    """API tests for category endpoints."""

    @pytest.mark.asyncio
    async def test_create_category_success(self, client: AsyncClient):
        category_data = {"name": "Structural Floor", "product_type": "structural-floor", "description": "Panels"}

        response = await client.post("/api/v1/category/", json=category_data)

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == category_data["name"]
        assert data["product_type"] == category_data["product_type"]
        assert data["description"] == "Panels"
        assert "id" in data
        assert "created_at" in data

    @pytest.mark.asyncio
    async def test_create_category_duplicate(self, client: AsyncClient):
        category_data = {"name": "Subfloor", "product_type": "subfloor"}
        await client.post("/api/v1/category/", json=category_data)

        response = await client.post("/api/v1/category/", json=category_data)

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_create_category_invalid(self, client: AsyncClient):
        response = await client.post("/api/v1/category/", json={"name": "", "product_type": "subfloor"})

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_category_name_exists(self, client: AsyncClient):
        await client.post("/api/v1/category/", json={"name": "Subfloor", "product_type": "subfloor"})

        taken = await client.get("/api/v1/category/exists", params={"name": "Subfloor"})
        free = await client.get("/api/v1/category/exists", params={"name": "Roofing"})

        assert taken.json() == {"exists": True}
        assert free.json() == {"exists": False}

    @pytest.mark.asyncio
    async def test_get_category(self, client: AsyncClient):
        created = (await client.post("/api/v1/category/", json={"name": "Subfloor", "product_type": "subfloor"})).json()

        response = await client.get(f"/api/v1/category/{created['id']}")

        assert response.status_code == 200
        assert response.json()["name"] == "Subfloor"

    @pytest.mark.asyncio
    async def test_get_category_not_found(self, client: AsyncClient):
        response = await client.get("/api/v1/category/99999")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_get_categories_paginated(self, client: AsyncClient):
        for i in range(3):
            await client.post("/api/v1/category/", json={"name": f"Subfloor {i}", "product_type": "subfloor"})
        await client.post("/api/v1/category/", json={"name": "Floor", "product_type": "structural-floor"})

        response = await client.get(
            "/api/v1/category/", params={"product_type": "subfloor", "page": 1, "items_per_page": 2}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["total_count"] == 3
        assert data["has_more"] is True
        assert len(data["data"]) == 2

    @pytest.mark.asyncio
    async def test_update_category(self, client: AsyncClient):
        created = (await client.post("/api/v1/category/", json={"name": "Subfloor", "product_type": "subfloor"})).json()

        response = await client.patch(f"/api/v1/category/{created['id']}", json={"description": "Updated"})

        assert response.status_code == 200
        assert response.json()["description"] == "Updated"

    @pytest.mark.asyncio
    async def test_update_category_rejects_null(self, client: AsyncClient):
        created = (await client.post("/api/v1/category/", json={"name": "Subfloor", "product_type": "subfloor"})).json()

        response = await client.patch(f"/api/v1/category/{created['id']}", json={"product_type": None})

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_update_category_name_conflict(self, client: AsyncClient):
        await client.post("/api/v1/category/", json={"name": "Floor", "product_type": "structural-floor"})
        created = (await client.post("/api/v1/category/", json={"name": "Subfloor", "product_type": "subfloor"})).json()

        response = await client.patch(f"/api/v1/category/{created['id']}", json={"name": "Floor"})

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_update_category_not_found(self, client: AsyncClient):
        response = await client.patch("/api/v1/category/99999", json={"description": "x"})

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_category(self, client: AsyncClient):
        created = (await client.post("/api/v1/category/", json={"name": "Subfloor", "product_type": "subfloor"})).json()

        response = await client.delete(f"/api/v1/category/{created['id']}")

        assert response.status_code == 204
        assert (await client.get(f"/api/v1/category/{created['id']}")).status_code == 404
