"""YouTube upload relay service.

This module provides the UploadService, which runs one `/upload` request
end to end: validation, transport selection, request-body assembly and the
single resumable upload call.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from app.core.exceptions import RemoteUploadError, VideoFileNotFoundError
from app.core.logging import get_logger
from app.infrastructure.proxy import select_transport
from app.infrastructure.youtube_api import YouTubeUploadClient
from app.services.uploader.request_builder import (
    build_plan,
    extract_bearer_token,
    parse_upload_request,
)

logger = get_logger(__name__)

SHORT_URL_TEMPLATE = "https://youtu.be/{video_id}"


@dataclass(frozen=True)
class UploadOutcome:
    """Result of a relayed upload.

    Attributes:
        video_id: YouTube video ID
        url: Short watch URL
    """

    video_id: str
    url: str

    def to_response(self) -> dict[str, Any]:
        """Build the JSON body returned to the client."""
        return {"success": True, "id": self.video_id, "url": self.url}


class UploadService:
    """Relay a single upload request to YouTube.

    Validation runs in a fixed order and stops at the first failure:
    Authorization header, required fields, file existence, proxy URL.
    Only then is the file opened and the remote call made. Nothing is
    shared between calls.

    Example:
        >>> service = UploadService(YouTubeUploadClient())
        >>> outcome = await service.upload(
        ...     authorization="Bearer ya29...",
        ...     proxy_url=None,
        ...     payload={"filePath": "/tmp/v.mp4", "title": "T"},
        ... )
        >>> print(outcome.url)
    """

    def __init__(self, upload_client: YouTubeUploadClient) -> None:
        """Initialize UploadService.

        Args:
            upload_client: Resumable upload capability
        """
        self.upload_client = upload_client

    async def upload(
        self,
        authorization: str | None,
        proxy_url: str | None,
        payload: Any,
    ) -> UploadOutcome:
        """Validate the request and perform the upload.

        Args:
            authorization: Raw Authorization header
            proxy_url: Raw proxy_url header, None for a direct connection
            payload: Decoded JSON body

        Returns:
            UploadOutcome with the new video ID and URL

        Raises:
            AuthError: If the Authorization header is missing or malformed
            ValidationError: If filePath/title are missing or fields are invalid
            VideoFileNotFoundError: If filePath does not exist
            ProxyError: If proxy_url cannot be used
            RemoteUploadError: If the YouTube call fails
        """
        access_token = extract_bearer_token(authorization)
        request = parse_upload_request(payload)

        video_path = Path(request.file_path)
        if not video_path.is_file():
            raise VideoFileNotFoundError(request.file_path)

        transport = select_transport(proxy_url)
        plan = build_plan(request)

        logger.info(
            "Starting video upload",
            title=request.title[:50],
            parts=plan.part,
            transport=transport.kind,
            file_size=video_path.stat().st_size,
        )

        try:
            with open(video_path, "rb") as stream:
                response = await self.upload_client.insert_video(
                    access_token=access_token,
                    transport=transport,
                    parts=plan.parts,
                    body=plan.to_body(),
                    stream=stream,
                )
        except RemoteUploadError as e:
            logger.error(
                "Video upload failed",
                error=e.message,
                status_code=e.status_code,
                exc_info=True,
                **e.context,
            )
            raise

        video_id = str(response["id"])
        return UploadOutcome(video_id=video_id, url=SHORT_URL_TEMPLATE.format(video_id=video_id))


__all__ = [
    "UploadOutcome",
    "UploadService",
]
