"""YouTube Data API upload client.

This module provides the resumable `videos.insert` capability the relay
forwards requests to. Each call is one-shot: failures are surfaced
immediately and never retried here.
"""

import asyncio
import json
import time
from collections.abc import Callable, Sequence
from typing import IO, Any

import socks
from googleapiclient.discovery import Resource
from googleapiclient.errors import HttpError
from googleapiclient.http import HttpRequest, MediaIoBaseUpload

from app.core.config import DEFAULT_CHUNK_SIZE
from app.core.exceptions import RemoteUploadError
from app.core.logging import get_logger
from app.infrastructure.proxy import Transport
from app.infrastructure.youtube_auth import build_youtube_service

logger = get_logger(__name__)

ServiceFactory = Callable[[str, Transport, float | None], Resource]


def extract_error_message(exc: BaseException) -> str:
    """Find the most specific human-readable message for an upload failure.

    For HttpError the JSON error body is unwrapped in order:
    `error.errors[0].message`, `error.message`, then the HTTP reason.
    SOCKS/HTTP-CONNECT failures raised by httplib2 are prefixed so they
    read as proxy problems. Anything else falls back to `str(exc)`.

    Args:
        exc: Exception raised by the API client or transport

    Returns:
        Error message
    """
    if isinstance(exc, HttpError):
        try:
            data = json.loads(exc.content.decode("utf-8"))
        except (ValueError, UnicodeDecodeError, AttributeError):
            data = None

        error = data.get("error") if isinstance(data, dict) else None
        if isinstance(error, dict):
            errors = error.get("errors")
            if isinstance(errors, list) and errors and isinstance(errors[0], dict):
                if errors[0].get("message"):
                    return str(errors[0]["message"])
            if error.get("message"):
                return str(error["message"])

        reason = getattr(exc, "reason", None)
        return str(reason) if reason else str(exc)

    if isinstance(exc, socks.ProxyError):
        return f"Proxy error: {exc}"

    return str(exc) or exc.__class__.__name__


class YouTubeUploadClient:
    """Resumable upload capability for the YouTube Data API.

    A new authenticated service is built for every call, bound to the
    request's bearer token and transport, so nothing is shared between
    requests.

    Example:
        >>> client = YouTubeUploadClient()
        >>> with open("/tmp/v.mp4", "rb") as stream:
        ...     response = await client.insert_video(
        ...         access_token="ya29...",
        ...         transport=DirectTransport(),
        ...         parts=("snippet", "status"),
        ...         body={"snippet": {"title": "T"}, "status": {"privacyStatus": "private"}},
        ...         stream=stream,
        ...     )
    """

    def __init__(
        self,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        timeout: float | None = None,
        mimetype: str = "video/*",
        service_factory: ServiceFactory = build_youtube_service,
    ) -> None:
        """Initialize YouTube upload client.

        Args:
            chunk_size: Upload chunk size in bytes (-1 for a single request)
            timeout: Socket timeout in seconds, None for no timeout
            mimetype: MIME type declared for the media
            service_factory: Builds the authenticated API resource
        """
        self.chunk_size = chunk_size
        self.timeout = timeout
        self.mimetype = mimetype
        self.service_factory = service_factory

    def _build_request(
        self,
        access_token: str,
        transport: Transport,
        parts: Sequence[str],
        body: dict[str, Any],
        stream: IO[bytes],
    ) -> HttpRequest:
        youtube = self.service_factory(access_token, transport, self.timeout)
        media = MediaIoBaseUpload(
            stream,
            mimetype=self.mimetype,
            chunksize=self.chunk_size,
            resumable=True,
        )
        return youtube.videos().insert(
            part=",".join(parts),
            body=body,
            media_body=media,
        )

    @staticmethod
    def _run_to_completion(request: HttpRequest) -> dict[str, Any]:
        response = None
        while response is None:
            status, response = request.next_chunk()
            if status:
                logger.debug("Upload progress", progress=f"{int(status.progress() * 100)}%")
        return response

    async def insert_video(
        self,
        access_token: str,
        transport: Transport,
        parts: Sequence[str],
        body: dict[str, Any],
        stream: IO[bytes],
    ) -> dict[str, Any]:
        """Upload a video with its metadata in one resumable insert.

        Args:
            access_token: Bearer token presented as-is
            transport: Outbound transport (direct or proxied)
            parts: Resource parts present in body
            body: Video resource metadata
            stream: Readable binary stream of the video

        Returns:
            The inserted video resource

        Raises:
            RemoteUploadError: If the API call or transport fails
        """
        start_time = time.time()
        try:
            request = await asyncio.to_thread(
                self._build_request, access_token, transport, parts, body, stream
            )
            response = await asyncio.to_thread(self._run_to_completion, request)
        except HttpError as e:
            raise RemoteUploadError(
                message=extract_error_message(e),
                error_code=str(e.resp.status),
                error_reason=getattr(e, "reason", None),
            ) from e
        except Exception as e:
            raise RemoteUploadError(message=extract_error_message(e)) from e

        if not isinstance(response, dict) or not response.get("id"):
            raise RemoteUploadError(message="Upload response did not include a video id")

        logger.info(
            "Video uploaded",
            video_id=response["id"],
            upload_time_seconds=f"{time.time() - start_time:.1f}",
        )
        return response


__all__ = [
    "YouTubeUploadClient",
    "extract_error_message",
]
