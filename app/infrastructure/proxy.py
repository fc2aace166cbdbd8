"""Transport selection for outbound YouTube API calls.

A Transport produces the `httplib2.Http` the Google API client talks through.
Three variants exist:
- DirectTransport: no proxy, direct connection
- HttpProxyTransport: HTTP(S) forward proxy (CONNECT tunnelling)
- SocksProxyTransport: SOCKS4/4a/5/5h proxy

`select_transport()` picks one from the raw `proxy_url` header value.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from urllib.parse import unquote, urlsplit

import httplib2
import socks

from app.core.exceptions import ProxyError
from app.core.logging import get_logger

logger = get_logger(__name__)

SOCKS_PREFIX = re.compile(r"^socks", re.IGNORECASE)

# scheme -> (socks proxy type, resolve DNS on the proxy)
SOCKS_SCHEMES: dict[str, tuple[int, bool]] = {
    "socks": (socks.PROXY_TYPE_SOCKS5, False),
    "socks5": (socks.PROXY_TYPE_SOCKS5, False),
    "socks5h": (socks.PROXY_TYPE_SOCKS5, True),
    "socks4": (socks.PROXY_TYPE_SOCKS4, False),
    "socks4a": (socks.PROXY_TYPE_SOCKS4, True),
}

HTTP_SCHEMES = ("http", "https")

DEFAULT_PORTS = {"http": 80, "https": 443}
DEFAULT_SOCKS_PORT = 1080


class Transport(ABC):
    """Abstract outbound transport.

    Subclasses only describe how to reach the network; building the
    `httplib2.Http` is shared.
    """

    kind: str = "direct"

    @abstractmethod
    def proxy_info(self) -> httplib2.ProxyInfo | None:
        """Return httplib2 proxy settings, or None for a direct connection."""

    def build_http(self, timeout: float | None = None) -> httplib2.Http:
        """Create a fresh HTTP object bound to this transport.

        Args:
            timeout: Socket timeout in seconds, None for no timeout

        Returns:
            httplib2.Http configured for this transport
        """
        return httplib2.Http(timeout=timeout, proxy_info=self.proxy_info())


@dataclass(frozen=True)
class DirectTransport(Transport):
    """Direct connection, environment proxy variables ignored."""

    kind = "direct"

    def proxy_info(self) -> httplib2.ProxyInfo | None:
        return None


@dataclass(frozen=True)
class _ProxyTransport(Transport):
    """Proxy endpoint shared by the HTTP and SOCKS variants.

    Attributes:
        host: Proxy hostname
        port: Proxy port
        username: Optional proxy username
        password: Optional proxy password
    """

    host: str
    port: int
    username: str | None = None
    password: str | None = None


@dataclass(frozen=True)
class HttpProxyTransport(_ProxyTransport):
    """HTTP(S) forward proxy. HTTPS targets are tunnelled with CONNECT."""

    kind = "http"

    def proxy_info(self) -> httplib2.ProxyInfo:
        return httplib2.ProxyInfo(
            proxy_type=socks.PROXY_TYPE_HTTP,
            proxy_host=self.host,
            proxy_port=self.port,
            proxy_user=self.username,
            proxy_pass=self.password,
        )


@dataclass(frozen=True)
class SocksProxyTransport(_ProxyTransport):
    """SOCKS proxy.

    Attributes:
        proxy_type: httplib2 socks proxy type (SOCKS4 or SOCKS5)
        remote_dns: Resolve hostnames on the proxy side
    """

    proxy_type: int = socks.PROXY_TYPE_SOCKS5
    remote_dns: bool = False

    kind = "socks"

    def proxy_info(self) -> httplib2.ProxyInfo:
        return httplib2.ProxyInfo(
            proxy_type=self.proxy_type,
            proxy_host=self.host,
            proxy_port=self.port,
            proxy_rdns=self.remote_dns,
            proxy_user=self.username,
            proxy_pass=self.password,
        )


def _split_proxy_url(proxy_url: str) -> tuple[str, str, int | None, str | None, str | None]:
    """Split a proxy URL into scheme, host, port and credentials.

    Raises:
        ProxyError: If the URL has no scheme/host or an invalid port
    """
    try:
        parts = urlsplit(proxy_url.strip())
        port = parts.port
    except ValueError as e:
        raise ProxyError(str(e), proxy_url=proxy_url) from e

    scheme = parts.scheme.lower()
    if not scheme or not parts.hostname:
        raise ProxyError("proxy URL must include a scheme and a host", proxy_url=proxy_url)

    username = unquote(parts.username) if parts.username else None
    password = unquote(parts.password) if parts.password else None
    return scheme, parts.hostname, port, username, password


def select_transport(proxy_url: str | None) -> Transport:
    """Select the outbound transport for a raw proxy URL.

    Args:
        proxy_url: Value of the `proxy_url` header, None/empty for direct

    Returns:
        DirectTransport, SocksProxyTransport (case-insensitive `socks` prefix)
        or HttpProxyTransport (http/https)

    Raises:
        ProxyError: If the URL cannot be turned into a usable transport
    """
    if not proxy_url or not proxy_url.strip():
        return DirectTransport()

    scheme, host, port, username, password = _split_proxy_url(proxy_url)

    if SOCKS_PREFIX.match(scheme):
        if scheme not in SOCKS_SCHEMES:
            raise ProxyError(f"unsupported SOCKS scheme: {scheme}", proxy_url=proxy_url)
        proxy_type, remote_dns = SOCKS_SCHEMES[scheme]
        transport: Transport = SocksProxyTransport(
            host=host,
            port=port or DEFAULT_SOCKS_PORT,
            username=username,
            password=password,
            proxy_type=proxy_type,
            remote_dns=remote_dns,
        )
    else:
        if scheme not in HTTP_SCHEMES:
            raise ProxyError(f"unsupported proxy scheme: {scheme}", proxy_url=proxy_url)
        transport = HttpProxyTransport(
            host=host,
            port=port or DEFAULT_PORTS[scheme],
            username=username,
            password=password,
        )

    logger.debug("Proxy transport selected", kind=transport.kind, proxy_host=host)
    return transport


__all__ = [
    "DirectTransport",
    "HttpProxyTransport",
    "SocksProxyTransport",
    "Transport",
    "select_transport",
]
