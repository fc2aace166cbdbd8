"""Infrastructure layer components.

This module provides the outbound side of the relay: proxy transports,
bearer-token authentication and the YouTube upload client.
"""

from app.infrastructure.proxy import (
    DirectTransport,
    HttpProxyTransport,
    SocksProxyTransport,
    Transport,
    select_transport,
)
from app.infrastructure.youtube_api import YouTubeUploadClient

__all__ = [
    "DirectTransport",
    "HttpProxyTransport",
    "SocksProxyTransport",
    "Transport",
    "YouTubeUploadClient",
    "select_transport",
]
