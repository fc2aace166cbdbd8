"""Tests for the HTTP surface (app.main and app.api)."""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from app.core.config import get_config
from app.core.container import override_upload_client
from app.core.exceptions import RemoteUploadError
from app.main import app, create_app

AUTH = {"Authorization": "Bearer token123"}


@pytest.fixture
def client(upload_client_stub: MagicMock) -> TestClient:
    """Create test client with the upload capability stubbed.

    Returns:
        FastAPI test client
    """
    with override_upload_client(upload_client_stub):
        yield TestClient(app)


@pytest.mark.unit
def test_create_app_registers_routes() -> None:
    """Test a fresh application exposes both endpoints."""
    paths = create_app().openapi()["paths"]
    assert "get" in paths["/health"]
    assert "post" in paths["/upload"]


@pytest.mark.unit
def test_health_check(client: TestClient) -> None:
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert isinstance(data["timestamp"], int)
    assert data["timestamp"] > 1_600_000_000_000


@pytest.mark.unit
def test_upload_minimal(
    client: TestClient, upload_client_stub: MagicMock, video_file: Path
) -> None:
    """Test end-to-end upload with only required fields."""
    response = client.post(
        "/upload",
        headers=AUTH,
        json={"filePath": str(video_file), "title": "T"},
    )

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "id": "vid123",
        "url": "https://youtu.be/vid123",
    }
    upload_client_stub.insert_video.assert_awaited_once()
    kwargs = upload_client_stub.insert_video.await_args.kwargs
    assert kwargs["parts"] == ("snippet", "status")
    assert kwargs["body"]["snippet"] == {"title": "T", "description": "", "tags": []}
    assert kwargs["body"]["status"] == {"privacyStatus": "private"}


@pytest.mark.unit
def test_upload_full_metadata(
    client: TestClient, upload_client_stub: MagicMock, video_file: Path
) -> None:
    """Test every section is forwarded when populated."""
    response = client.post(
        "/upload",
        headers=AUTH,
        json={
            "filePath": str(video_file),
            "title": "T",
            "description": "D",
            "tags": ["a", "b"],
            "categoryId": "22",
            "privacyStatus": "unlisted",
            "embeddable": False,
            "madeForKids": "false",
            "containsSyntheticMedia": True,
            "recordingDetails": {"recordingDate": "2026-10-01T00:00:00Z"},
            "contentDetails": {},
            "localizations": {"en": {"title": "T", "description": "D"}},
        },
    )

    assert response.status_code == 200
    kwargs = upload_client_stub.insert_video.await_args.kwargs
    assert kwargs["parts"] == ("snippet", "status", "recordingDetails", "localizations")
    assert kwargs["body"]["status"] == {
        "privacyStatus": "unlisted",
        "embeddable": False,
        "containsSyntheticMedia": True,
    }


@pytest.mark.unit
@pytest.mark.parametrize(
    "headers",
    [{}, {"Authorization": "token123"}, {"Authorization": "Basic abc"}],
)
def test_upload_auth_errors(
    client: TestClient, upload_client_stub: MagicMock, headers: dict
) -> None:
    """Test missing or malformed Authorization header."""
    response = client.post("/upload", headers=headers, json={"filePath": "/nope", "title": "T"})

    assert response.status_code == 401
    assert response.json() == {"error": "missing or malformed Authorization header"}
    upload_client_stub.insert_video.assert_not_called()


@pytest.mark.unit
def test_upload_missing_fields(client: TestClient, upload_client_stub: MagicMock) -> None:
    """Test missing filePath/title."""
    response = client.post("/upload", headers=AUTH, json={"title": "T"})

    assert response.status_code == 400
    assert response.json() == {"error": "filePath and title are required"}
    upload_client_stub.insert_video.assert_not_called()


@pytest.mark.unit
def test_upload_empty_body(client: TestClient, upload_client_stub: MagicMock) -> None:
    """Test an empty body is reported as missing fields."""
    response = client.post("/upload", headers=AUTH)

    assert response.status_code == 400
    assert response.json()["error"] == "filePath and title are required"


@pytest.mark.unit
def test_upload_invalid_json(client: TestClient, upload_client_stub: MagicMock) -> None:
    """Test a body that is not JSON."""
    response = client.post(
        "/upload",
        headers={**AUTH, "Content-Type": "application/json"},
        content=b"{not json",
    )

    assert response.status_code == 400
    assert response.json()["error"] == "request body must be valid JSON"
    assert "detail" in response.json()


@pytest.mark.unit
def test_upload_file_not_found(client: TestClient, upload_client_stub: MagicMock) -> None:
    """Test a missing file never reaches the upload capability."""
    response = client.post(
        "/upload",
        headers=AUTH,
        json={"filePath": "/nonexistent/v.mp4", "title": "T"},
    )

    assert response.status_code == 400
    assert response.json() == {"error": "File not found: /nonexistent/v.mp4"}
    upload_client_stub.insert_video.assert_not_called()


@pytest.mark.unit
def test_upload_invalid_proxy(
    client: TestClient, upload_client_stub: MagicMock, video_file: Path
) -> None:
    """Test a malformed proxy URL header."""
    response = client.post(
        "/upload",
        headers={**AUTH, "proxy_url": "http://host:notaport"},
        json={"filePath": str(video_file), "title": "T"},
    )

    assert response.status_code == 400
    data = response.json()
    assert data["error"] == "Invalid proxy"
    assert data["detail"]
    upload_client_stub.insert_video.assert_not_called()


@pytest.mark.unit
def test_upload_socks_proxy_header(
    client: TestClient, upload_client_stub: MagicMock, video_file: Path
) -> None:
    """Test the proxy_url header reaches transport selection."""
    response = client.post(
        "/upload",
        headers={**AUTH, "proxy_url": "socks5://host:1080"},
        json={"filePath": str(video_file), "title": "T"},
    )

    assert response.status_code == 200
    transport = upload_client_stub.insert_video.await_args.kwargs["transport"]
    assert transport.kind == "socks"


@pytest.mark.unit
@pytest.mark.parametrize(
    ("message", "status_code"),
    [
        ("Tunnel connection failed: 407 Proxy Authentication Required", 400),
        ("Backend Error", 500),
    ],
)
def test_upload_remote_errors(
    client: TestClient,
    upload_client_stub: MagicMock,
    video_file: Path,
    message: str,
    status_code: int,
) -> None:
    """Test remote failures are classified by the proxy heuristic."""
    upload_client_stub.insert_video = AsyncMock(side_effect=RemoteUploadError(message))

    response = client.post(
        "/upload",
        headers=AUTH,
        json={"filePath": str(video_file), "title": "T"},
    )

    assert response.status_code == status_code
    assert response.json() == {"error": message}


@pytest.mark.unit
def test_upload_unexpected_error(upload_client_stub: MagicMock, video_file: Path) -> None:
    """Test unexpected exceptions become a 500 JSON error."""
    upload_client_stub.insert_video = AsyncMock(side_effect=RuntimeError("kaboom"))

    with override_upload_client(upload_client_stub):
        client = TestClient(app, raise_server_exceptions=False)
        response = client.post(
            "/upload",
            headers=AUTH,
            json={"filePath": str(video_file), "title": "T"},
        )

    assert response.status_code == 500
    assert response.json() == {"error": "kaboom"}


@pytest.mark.unit
def test_upload_body_too_large(
    client: TestClient, upload_client_stub: MagicMock, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Test bodies above max_body_size are rejected."""
    monkeypatch.setattr(get_config(), "max_body_size", 64)

    response = client.post(
        "/upload",
        headers=AUTH,
        json={"filePath": "/tmp/v.mp4", "title": "T" * 100},
    )

    assert response.status_code == 413
    assert response.json() == {"error": "Request body too large"}
    upload_client_stub.insert_video.assert_not_called()
