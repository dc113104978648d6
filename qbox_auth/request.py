"""
Request views consumed by the signer.
"""

from dataclasses import dataclass, field
from typing import Mapping, Optional
from urllib.parse import urlsplit

import requests
from requests.structures import CaseInsensitiveDict

from .body import Body
from .constants import HEADER_CONTENT_TYPE, HEADER_HOST


def _header_str(value) -> str:
    # requests accepts bytes header values and sends them as latin-1
    if isinstance(value, bytes):
        return value.decode('latin-1')
    return value or ''


@dataclass(frozen=True)
class RequestView:
    """
    The parts of an HTTP request that take part in signing.

    ``query`` is the raw query string without the leading ``?``. Header
    lookup is case-insensitive.
    """

    method: str = 'GET'
    path: str = '/'
    query: str = ''
    host: str = ''
    headers: Mapping[str, str] = field(default_factory=CaseInsensitiveDict)
    body: Optional[Body] = None

    def __post_init__(self):
        if not isinstance(self.headers, CaseInsensitiveDict):
            object.__setattr__(self, 'headers', CaseInsensitiveDict(self.headers or {}))

    def header(self, name: str) -> str:
        """Return a header value, or an empty string when absent."""
        return _header_str(self.headers.get(name))

    @property
    def content_type(self) -> str:
        return self.header(HEADER_CONTENT_TYPE)

    @classmethod
    def from_url(cls, method: str, url: str, headers: Optional[Mapping[str, str]] = None,
                 body: Optional[Body] = None) -> 'RequestView':
        """
        Build a view from an absolute URL.

        The host comes from a ``Host`` header when one is set, otherwise
        from the URL's network location (including any port, excluding
        any ``user:password@`` credentials).
        """
        parts = urlsplit(url)
        headers = CaseInsensitiveDict(headers or {})

        return cls(
            method=method,
            path=parts.path,
            query=parts.query,
            host=_header_str(headers.get(HEADER_HOST)) or parts.netloc.rpartition('@')[2],
            headers=headers,
            body=body,
        )

    @classmethod
    def from_prepared(cls, prepared: requests.PreparedRequest) -> 'RequestView':
        """Build a view of a request prepared by a ``requests`` session."""
        return cls.from_url(prepared.method, prepared.url, prepared.headers, prepared.body)
