"""HTTP routes for the upload relay."""

import json
import time
from typing import Any

from fastapi import APIRouter, Depends, Request

from app.core.config import get_config
from app.core.container import get_upload_service
from app.core.exceptions import PayloadTooLargeError, ValidationError
from app.core.logging import request_log_context
from app.services.uploader.youtube_uploader import UploadService

router = APIRouter()

PROXY_URL_HEADER = "proxy_url"


@router.get("/health")
async def health_check() -> dict[str, Any]:
    """Health check endpoint.

    Returns:
        Status and current epoch time in milliseconds
    """
    return {"status": "ok", "timestamp": int(time.time() * 1000)}


async def read_json_body(request: Request) -> Any:
    """Read and decode the request body, enforcing the size limit.

    An empty body decodes to an empty object so that the required-field
    check reports it.

    Raises:
        PayloadTooLargeError: If the body exceeds max_body_size
        ValidationError: If the body is not valid JSON
    """
    limit = get_config().max_body_size

    content_length = request.headers.get("content-length")
    if content_length and content_length.isdigit() and int(content_length) > limit:
        raise PayloadTooLargeError(limit)

    raw = await request.body()
    if len(raw) > limit:
        raise PayloadTooLargeError(limit)
    if not raw.strip():
        return {}

    try:
        return json.loads(raw)
    except (ValueError, UnicodeDecodeError) as e:
        raise ValidationError("request body must be valid JSON", detail=str(e)) from e


@router.post("/upload")
async def upload_video(
    request: Request,
    service: UploadService = Depends(get_upload_service),
) -> dict[str, Any]:
    """Relay a video upload to YouTube.

    Headers:
        Authorization: `Bearer <access token>` (required)
        proxy_url: HTTP(S) or SOCKS proxy URL (optional)

    Returns:
        `{"success": true, "id": ..., "url": "https://youtu.be/<id>"}`
    """
    payload = await read_json_body(request)
    with request_log_context(path=request.url.path):
        outcome = await service.upload(
            authorization=request.headers.get("authorization"),
            proxy_url=request.headers.get(PROXY_URL_HEADER),
            payload=payload,
        )
    return outcome.to_response()


__all__ = ["router"]
