"""
Endpoint schemas: a data description of one HTTP call before it is bound to a node.

A schema names the verb, a relative path template such as
``api/addresses/{address}/balance``, the values for the template's
placeholders, optional query parameters and an optional JSON body. Binding a
schema to a base URL is a pure transformation; anything malformed fails with
UrlParseError before a request is ever sent.
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Mapping, Optional
from urllib.parse import quote

import httpx

from sia_client.errors import UrlParseError

_FORMATTER = string.Formatter()


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


@dataclass(frozen=True)
class EndpointSchema:
    method: HttpMethod
    path_schema: str
    path_params: Optional[Mapping[str, str]] = None
    query_params: Optional[Mapping[str, Any]] = None
    body: Any = None

    def resolve_path(self) -> str:
        """Fill the template's placeholders, encoding each value as one path segment."""
        params = dict(self.path_params or {})
        try:
            parsed = list(_FORMATTER.parse(self.path_schema))
        except ValueError as exc:
            raise UrlParseError(f"Malformed path template: {self.path_schema!r}") from exc

        parts: List[str] = []
        used: set[str] = set()
        for literal, field_name, format_spec, conversion in parsed:
            parts.append(literal)
            if field_name is None:
                continue
            if not field_name or format_spec or conversion:
                raise UrlParseError(f"Malformed path template: {self.path_schema!r}")
            if field_name not in params:
                raise UrlParseError(
                    f"Missing value for {{{field_name}}} in path template {self.path_schema!r}"
                )
            parts.append(quote(str(params[field_name]), safe=""))
            used.add(field_name)

        unused = set(params) - used
        if unused:
            raise UrlParseError(
                f"Path template {self.path_schema!r} has no placeholder for {sorted(unused)}"
            )
        return "".join(parts)

    def build_url(self, base_url: httpx.URL | str) -> httpx.URL:
        """Join the resolved path against ``base_url`` using RFC 3986 semantics."""
        try:
            base = httpx.URL(base_url)
        except httpx.InvalidURL as exc:
            raise UrlParseError(f"Invalid base URL: {base_url}", url=str(base_url)) from exc
        if base.scheme not in ("http", "https") or not base.host:
            raise UrlParseError(f"Base URL must be absolute http(s): {base_url}", url=str(base_url))

        path = self.resolve_path()
        try:
            relative = httpx.URL(path)
        except httpx.InvalidURL as exc:
            raise UrlParseError(f"Invalid endpoint path: {path!r}", url=str(base)) from exc
        # Templates always resolve under the node's base URL.
        if relative.is_absolute_url or path.startswith("//"):
            raise UrlParseError(f"Endpoint path must be relative: {path!r}", url=str(base))

        url = base.join(path)
        if self.query_params:
            url = url.copy_merge_params(dict(self.query_params))
        return url
