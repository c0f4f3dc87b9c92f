"""Browser origin allow-list with exact and suffix-wildcard matching.

Entries look like:
    https://portfolio.example.org   exact origin
    https://*.github.io             any subdomain of github.io over https
    *.example.org                   any subdomain of example.org, any scheme
    *                               every origin
"""

from dataclasses import dataclass, field
from urllib.parse import urlsplit

from starlette.middleware.cors import CORSMiddleware
from starlette.types import ASGIApp

DEFAULT_PORTS = {"http": 80, "https": 443}


@dataclass(frozen=True)
class _Origin:
    scheme: str
    host: str
    port: int | None


@dataclass(frozen=True)
class WildcardOrigin:
    """A `scheme://*.suffix[:port]` pattern. `scheme` is None for any scheme."""

    suffix: str  # Always starts with "."
    scheme: str | None = None
    port: int | None = None

    def matches(self, origin: _Origin) -> bool:
        if self.scheme is not None and origin.scheme != self.scheme:
            return False
        if self.port is not None and origin.port != self.port:
            return False
        if self.port is None and origin.port not in (None, DEFAULT_PORTS.get(origin.scheme)):
            return False
        return origin.host.endswith(self.suffix) and len(origin.host) > len(self.suffix)


def _parse_origin(value: str) -> _Origin | None:
    """Split an Origin header value into scheme, host and explicit port."""
    try:
        parts = urlsplit(value.strip())
        port = parts.port
    except ValueError:
        return None

    if not parts.scheme or not parts.hostname:
        return None
    if parts.path not in ("", "/") or parts.query or parts.fragment:
        return None
    return _Origin(scheme=parts.scheme.lower(), host=parts.hostname.lower(), port=port)


def _normalize(value: str) -> str:
    return value.strip().rstrip("/").lower()


@dataclass(frozen=True)
class OriginAllowList:
    """Decides whether a browser origin may call the API."""

    exact: frozenset[str] = field(default_factory=frozenset)
    wildcards: tuple[WildcardOrigin, ...] = ()
    allow_all: bool = False

    @classmethod
    def from_entries(cls, entries: list[str]) -> "OriginAllowList":
        """Build an allow-list from configured entries.

        Raises:
            ValueError: If a wildcard entry is malformed (e.g. `https://*`)
        """
        exact: set[str] = set()
        wildcards: list[WildcardOrigin] = []
        allow_all = False

        for raw in entries:
            entry = raw.strip()
            if not entry:
                continue
            if entry == "*":
                allow_all = True
            elif "*" in entry:
                wildcards.append(cls._parse_wildcard(entry))
            else:
                exact.add(_normalize(entry))

        return cls(exact=frozenset(exact), wildcards=tuple(wildcards), allow_all=allow_all)

    @staticmethod
    def _parse_wildcard(entry: str) -> WildcardOrigin:
        scheme: str | None = None
        rest = entry
        if "://" in entry:
            scheme, rest = entry.split("://", 1)
            scheme = scheme.lower()

        rest = rest.rstrip("/")
        port: int | None = None
        if ":" in rest:
            rest, port_str = rest.rsplit(":", 1)
            if not port_str.isdigit():
                raise ValueError(f"Invalid port in origin pattern: {entry}")
            port = int(port_str)

        if not rest.startswith("*.") or "*" in rest[2:] or len(rest) <= 2:
            raise ValueError(f"Unsupported origin pattern: {entry}")

        return WildcardOrigin(suffix=rest[1:].lower(), scheme=scheme, port=port)

    def matches(self, origin: str | None) -> bool:
        """Check whether an Origin header value is allowed."""
        if not origin:
            return False
        if self.allow_all:
            return True
        if _normalize(origin) in self.exact:
            return True

        parsed = _parse_origin(origin)
        if parsed is None:
            return False
        return any(pattern.matches(parsed) for pattern in self.wildcards)

    def __len__(self) -> int:
        return len(self.exact) + len(self.wildcards) + int(self.allow_all)


class AllowListCORSMiddleware(CORSMiddleware):
    """Starlette CORS middleware driven by an OriginAllowList.

    Preflight requests are answered here and never reach route handlers.
    Allowed origins are echoed back explicitly so credentials keep working.
    """

    def __init__(self, app: ASGIApp, allow_list: OriginAllowList, **kwargs) -> None:
        super().__init__(app, allow_origins=sorted(allow_list.exact), **kwargs)
        self.allow_list = allow_list

    def is_allowed_origin(self, origin: str) -> bool:
        return self.allow_list.matches(origin)
