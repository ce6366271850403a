"""Proxy URL parsing for outbound TeePublic requests."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote, unquote, urlsplit

from integrations.errors import InvalidProxyError

DEFAULT_PORTS = {"https": 443}
FALLBACK_PORT = 80


@dataclass(frozen=True)
class ProxyAuth:
    username: str
    password: str


@dataclass(frozen=True)
class ProxyConfig:
    """Proxy routing derived from a `scheme://[user[:pass]@]host[:port]` URL."""

    host: str
    port: int
    protocol: str | None = None
    auth: ProxyAuth | None = None

    @property
    def url(self) -> str:
        """Render the proxy back into a URL the HTTP client accepts."""
        scheme = self.protocol or "http"
        host = f"[{self.host}]" if ":" in self.host else self.host
        userinfo = ""
        if self.auth is not None:
            userinfo = f"{quote(self.auth.username, safe='')}:{quote(self.auth.password, safe='')}@"
        return f"{scheme}://{userinfo}{host}:{self.port}"

    def __repr__(self) -> str:
        auth = "<redacted>" if self.auth is not None else None
        return f"ProxyConfig(host={self.host!r}, port={self.port}, protocol={self.protocol!r}, auth={auth})"


def parse_proxy(proxy_url: str) -> ProxyConfig:
    """
    Parse a proxy URL into a ProxyConfig.

    The port falls back to 443 for https and 80 otherwise. User-info, when
    present, is URL-decoded into `auth`.
    """
    try:
        parts = urlsplit(proxy_url.strip())
        explicit_port = parts.port
    except ValueError as exc:
        raise InvalidProxyError("Proxy URL is invalid. Please supply a valid http(s) URL.") from exc

    if not parts.scheme or not parts.hostname:
        raise InvalidProxyError("Proxy URL is invalid. Please supply a valid http(s) URL.")

    protocol = parts.scheme.lower()
    port = explicit_port if explicit_port is not None else DEFAULT_PORTS.get(protocol, FALLBACK_PORT)

    auth = None
    if parts.username or parts.password:
        auth = ProxyAuth(
            username=unquote(parts.username or ""),
            password=unquote(parts.password or ""),
        )

    return ProxyConfig(host=parts.hostname, port=port, protocol=protocol or None, auth=auth)
