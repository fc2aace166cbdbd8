"""Bearer-token authentication for the YouTube Data API.

The relay never runs an OAuth flow. Callers present an already-issued
access token, which is wrapped into google-auth credentials without a
refresh token and bound to the request's transport.
"""

import google_auth_httplib2
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import Resource, build

from app.core.logging import get_logger
from app.infrastructure.proxy import Transport

logger = get_logger(__name__)

YOUTUBE_API_SERVICE_NAME = "youtube"
YOUTUBE_API_VERSION = "v3"


def credentials_from_token(access_token: str) -> Credentials:
    """Wrap a bare access token into google-auth credentials.

    Args:
        access_token: Pre-obtained OAuth access token

    Returns:
        Credentials that cannot refresh themselves
    """
    return Credentials(token=access_token)


def authorized_http(
    access_token: str,
    transport: Transport,
    timeout: float | None = None,
) -> google_auth_httplib2.AuthorizedHttp:
    """Build an HTTP object that sends the bearer token through a transport.

    Args:
        access_token: Pre-obtained OAuth access token
        transport: Outbound transport (direct or proxied)
        timeout: Socket timeout in seconds

    Returns:
        AuthorizedHttp wrapping the transport's httplib2.Http
    """
    # No refresh token: a 401 must reach the caller with the API's own message
    return google_auth_httplib2.AuthorizedHttp(
        credentials_from_token(access_token),
        http=transport.build_http(timeout=timeout),
        refresh_status_codes=(),
    )


def build_youtube_service(
    access_token: str,
    transport: Transport,
    timeout: float | None = None,
) -> Resource:
    """Get a YouTube Data API v3 service authenticated with a bearer token.

    Args:
        access_token: Pre-obtained OAuth access token
        transport: Outbound transport (direct or proxied)
        timeout: Socket timeout in seconds

    Returns:
        YouTube API service resource
    """
    service = build(
        YOUTUBE_API_SERVICE_NAME,
        YOUTUBE_API_VERSION,
        http=authorized_http(access_token, transport, timeout=timeout),
        cache_discovery=False,
        static_discovery=True,
    )
    logger.debug("Created YouTube Data API service", transport=transport.kind)
    return service


__all__ = [
    "authorized_http",
    "build_youtube_service",
    "credentials_from_token",
]
