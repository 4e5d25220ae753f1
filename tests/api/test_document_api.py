"""API tests for Document endpoints."""

import base64
import uuid

import pytest
from httpx import AsyncClient

from doccatalog.infrastructure.storage import LocalBlobStore, get_blob_store
from doccatalog.interfaces.api.dependencies import get_metadata_store
from doccatalog.interfaces.main import app
from tests.helpers import InMemoryBlobStore, InMemoryMetadataStore, make_pdf


async def upload(client: AsyncClient, filename: str = "XYZ-TDS-2023.pdf", product_type: str = "subfloor", **kwargs):
    data = kwargs.pop("data", make_pdf())
    content_type = kwargs.pop("content_type", "application/pdf")
    return await client.post(
        "/api/v1/document/upload",
        files={"file": (filename, data, content_type)},
        data={"product_type": product_type},
    )


class TestDocumentAPI:
    """API tests for document endpoints."""

    @pytest.mark.asyncio
    async def test_upload_document_success(self, client: AsyncClient, local_blob_store: LocalBlobStore, tmp_path):
        """Test successful upload, classification and storage."""
        response = await upload(client, product_type="structural-floor")

        assert response.status_code == 201
        data = response.json()
        assert data["type"] == "TDS"
        assert data["name"] == "Technical Data Sheet"
        assert data["description"] == "TDS Document"
        assert data["filename"] == "XYZ-TDS-2023.pdf"
        assert data["products"] == ["3/4-in (20mm)"]
        assert data["product_type"] == "structural-floor"
        assert data["required"] is False
        assert data["size"] == 2048
        assert data["url"].startswith("http://test/files/")
        assert "id" in data
        assert "created_at" in data

        stored = tmp_path / "blobs" / data["storage_key"]
        assert stored.read_bytes() == make_pdf()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "content_type, body, detail",
        [
            ("image/png", make_pdf(), "File must be a PDF document"),
            ("application/pdf", make_pdf(100), "File is too small to be a valid PDF"),
            ("application/pdf", b"NOTPDF" + b"0" * 2048, "File does not appear to be a valid PDF"),
        ],
    )
    async def test_upload_document_rejected(self, client: AsyncClient, tmp_path, content_type, body, detail):
        """Test that rejected uploads return 422 and store nothing."""
        response = await upload(client, data=body, content_type=content_type)

        assert response.status_code == 422
        assert response.json()["detail"] == detail
        assert not (tmp_path / "blobs").exists() or list((tmp_path / "blobs").iterdir()) == []

    @pytest.mark.asyncio
    async def test_upload_document_missing_product_type(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/document/upload", files={"file": ("a.pdf", make_pdf(), "application/pdf")}
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_upload_document_storage_failure(self, client: AsyncClient):
        failing_store = InMemoryBlobStore()
        failing_store.fail_put = True
        app.dependency_overrides[get_blob_store] = lambda: failing_store

        response = await upload(client)

        assert response.status_code == 502

    @pytest.mark.asyncio
    async def test_upload_document_metadata_failure_removes_file(self, client: AsyncClient, tmp_path):
        """Test that the stored file is removed when the record cannot be saved."""
        failing_metadata = InMemoryMetadataStore()
        failing_metadata.fail_insert = True
        app.dependency_overrides[get_metadata_store] = lambda: failing_metadata

        response = await upload(client)

        assert response.status_code == 500
        assert list((tmp_path / "blobs").iterdir()) == []

    @pytest.mark.asyncio
    async def test_get_document(self, client: AsyncClient):
        created = (await upload(client)).json()

        response = await client.get(f"/api/v1/document/{created['id']}")

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == created["id"]
        assert data["url"] == created["url"]
        assert data["storage_key"] == created["storage_key"]

    @pytest.mark.asyncio
    async def test_get_document_not_found(self, client: AsyncClient):
        response = await client.get(f"/api/v1/document/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json()["detail"] == "Document not found"

    @pytest.mark.asyncio
    async def test_get_document_invalid_id(self, client: AsyncClient):
        response = await client.get("/api/v1/document/not-a-uuid")

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_list_documents_by_product_type(self, client: AsyncClient):
        await upload(client, filename="a-tds.pdf", product_type="subfloor")
        await upload(client, filename="b-warranty.pdf", product_type="subfloor")
        await upload(client, filename="c-esr.pdf", product_type="structural-floor")

        response = await client.get("/api/v1/document/", params={"product_type": "subfloor"})

        assert response.status_code == 200
        data = response.json()
        assert {d["filename"] for d in data} == {"a-tds.pdf", "b-warranty.pdf"}

        everything = await client.get("/api/v1/document/")
        assert len(everything.json()) == 3

    @pytest.mark.asyncio
    async def test_update_document(self, client: AsyncClient, tmp_path):
        created = (await upload(client)).json()

        response = await client.patch(
            f"/api/v1/document/{created['id']}",
            json={"name": "Renamed", "required": True, "type": "ESR", "products": ["3/4-in (20mm)"]},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Renamed"
        assert data["required"] is True
        assert data["type"] == "ESR"
        assert data["products"] == ["3/4-in (20mm)"]
        assert data["url"] == created["url"]
        assert (tmp_path / "blobs" / created["storage_key"]).exists()

    @pytest.mark.asyncio
    async def test_update_document_rejects_file_fields(self, client: AsyncClient):
        created = (await upload(client)).json()

        response = await client.patch(f"/api/v1/document/{created['id']}", json={"url": "http://evil/x.pdf"})

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_update_document_rejects_null(self, client: AsyncClient):
        """Test that an explicit null is a client error and leaves the record untouched."""
        created = (await upload(client)).json()

        response = await client.patch(f"/api/v1/document/{created['id']}", json={"name": None})

        assert response.status_code == 422
        current = (await client.get(f"/api/v1/document/{created['id']}")).json()
        assert current["name"] == created["name"]

    @pytest.mark.asyncio
    async def test_upload_document_filename_too_long(self, client: AsyncClient, tmp_path):
        response = await upload(client, filename="a" * 300 + "-TDS.pdf")

        assert response.status_code == 422
        assert "filename" in response.json()["detail"]
        assert not (tmp_path / "blobs").exists() or list((tmp_path / "blobs").iterdir()) == []
        assert (await client.get("/api/v1/document/")).json() == []

    @pytest.mark.asyncio
    async def test_update_document_not_found(self, client: AsyncClient):
        response = await client.patch(f"/api/v1/document/{uuid.uuid4()}", json={"name": "x"})

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_document(self, client: AsyncClient, tmp_path):
        """Test that deleting removes both the record and the stored file."""
        created = (await upload(client)).json()

        response = await client.delete(f"/api/v1/document/{created['id']}")

        assert response.status_code == 204
        assert (await client.get(f"/api/v1/document/{created['id']}")).status_code == 404
        assert not (tmp_path / "blobs" / created["storage_key"]).exists()

    @pytest.mark.asyncio
    async def test_delete_document_not_found(self, client: AsyncClient):
        response = await client.delete(f"/api/v1/document/{uuid.uuid4()}")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_export_documents(self, client: AsyncClient, tmp_path):
        """Test export with one document whose file has gone missing."""
        kept = (await upload(client, filename="kept-tds.pdf")).json()
        lost = (await upload(client, filename="lost-tds.pdf")).json()
        (tmp_path / "blobs" / lost["storage_key"]).unlink()

        response = await client.get("/api/v1/document/export")

        assert response.status_code == 200
        data = response.json()
        assert [d["id"] for d in data["documents"]] == [kept["id"]]
        assert base64.b64decode(data["documents"][0]["file_data"]) == make_pdf()
        assert [s["id"] for s in data["skipped"]] == [lost["id"]]

    @pytest.mark.asyncio
    async def test_health_check(self, client: AsyncClient):
        response = await client.get("/api/v1/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
