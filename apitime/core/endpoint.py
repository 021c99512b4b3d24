"""Endpoint — named base URLs and the method/path they resolve to.

Invariants:
    - Endpoint.url appends the path as a path component: exactly one "/" between
      base path and operation path, base query string kept
    - The operation path is literal text: "?", "#", "%" and spaces are
      percent-encoded, never read as URL syntax
    - An empty path resolves to the base URL itself
"""

from dataclasses import dataclass
from urllib.parse import quote

import httpx

from apitime.core.domain_types import HTTPMethod

# RFC 3986 pchar set plus "/", minus "%"
_PATH_SAFE = "/:@!$&'()*+,;=-._~"


def encode_path(path: str) -> str:
    return quote(path, safe=_PATH_SAFE)


@dataclass(frozen=True)
class APIConfiguration:
    """A base URL registered under a key."""
    key: str
    base_url: httpx.URL | str

    def __post_init__(self):
        object.__setattr__(self, "base_url", httpx.URL(self.base_url))


@dataclass(frozen=True)
class Endpoint:
    method: HTTPMethod
    base_url: httpx.URL
    path: str

    @property
    def url(self) -> httpx.URL:
        segment = encode_path(self.path.lstrip("/"))
        if not segment:
            return self.base_url
        base_path = self.base_url.raw_path.decode("ascii").split("?", 1)[0].rstrip("/")
        return self.base_url.copy_with(path=f"{base_path}/{segment}")
