from typing import Dict, Mapping, Optional
from urllib.parse import urlsplit

import requests
from pydantic import BaseModel, ConfigDict, Field
from requests.structures import CaseInsensitiveDict


class InboundRequest(BaseModel):
    """
    The parts of an HTTP request the tenancy layer reads.

    ``path`` is the URL path only; ``request_uri`` is the raw request target
    including the query string, used where a query marks a collection call.
    """
    model_config = ConfigDict(frozen=True)

    method: str
    path: str
    request_uri: str = ""
    headers: Dict[str, str] = Field(default_factory=dict)

    def header(self, name: str, default: str = "") -> str:
        """Case-insensitive header lookup."""
        return CaseInsensitiveDict(self.headers).get(name, default)

    @classmethod
    def from_url(
        cls,
        method: str,
        url: str,
        headers: Optional[Mapping[str, str]] = None,
    ) -> "InboundRequest":
        """Build a request from a method and an absolute or origin-form URL."""
        parts = urlsplit(url)
        path = parts.path or "/"
        request_uri = f"{path}?{parts.query}" if parts.query else path
        return cls(
            method=method.upper(),
            path=path,
            request_uri=request_uri,
            headers=dict(headers or {}),
        )

    @classmethod
    def from_prepared(cls, prepared: requests.PreparedRequest) -> "InboundRequest":
        """Build a request from a ``requests`` prepared request, e.g. one issued by the docker SDK."""
        return cls.from_url(
            prepared.method or "GET",
            prepared.url or "/",
            dict(prepared.headers),
        )
