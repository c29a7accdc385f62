"""Immutable URL value object used for active-state matching."""

from __future__ import annotations

from typing import Dict, List, Optional
from urllib.parse import parse_qsl, quote, urlencode, urlsplit

from .exceptions import InvalidArgument

VALID_SCHEMES = ("http", "https", "mailto")


class QueryParameters:
    """Ordered query-string parameters."""

    def __init__(self, parameters: Dict[str, str] | None = None) -> None:
        self._parameters: Dict[str, str] = dict(parameters or {})

    @classmethod
    def from_string(cls, query: str) -> "QueryParameters":
        return cls(dict(parse_qsl(query, keep_blank_values=True)))

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._parameters.get(key, default)

    def has(self, key: str) -> bool:
        return key in self._parameters

    def set(self, key: str, value: str) -> "QueryParameters":
        self._parameters[key] = value
        return self

    def unset(self, key: str) -> "QueryParameters":
        self._parameters.pop(key, None)
        return self

    def all(self) -> Dict[str, str]:
        return dict(self._parameters)

    def copy(self) -> "QueryParameters":
        return QueryParameters(self._parameters)

    def __str__(self) -> str:
        return urlencode(self._parameters, quote_via=quote)


class Url:
    """A parsed URL. Every ``with_*`` method returns a modified copy."""

    def __init__(self) -> None:
        self._scheme = ""
        self._host = ""
        self._port: Optional[int] = None
        self._user = ""
        self._password: Optional[str] = None
        self._path = ""
        self._query = QueryParameters()
        self._fragment = ""

    @classmethod
    def create(cls) -> "Url":
        return cls()

    @classmethod
    def from_string(cls, url: str) -> "Url":
        parts = urlsplit(url)

        instance = cls()
        instance._scheme = _sanitize_scheme(parts.scheme) if parts.scheme else ""
        instance._host = parts.hostname or ""
        instance._port = parts.port
        instance._user = parts.username or ""
        instance._password = parts.password
        instance._path = parts.path or "/"
        instance._query = QueryParameters.from_string(parts.query)
        instance._fragment = parts.fragment
        return instance

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def scheme(self) -> str:
        return self._scheme

    @property
    def host(self) -> str:
        return self._host

    @property
    def port(self) -> Optional[int]:
        return self._port

    @property
    def path(self) -> str:
        return self._path

    @property
    def fragment(self) -> str:
        return self._fragment

    @property
    def query(self) -> str:
        return str(self._query)

    @property
    def user_info(self) -> str:
        user_info = self._user
        if self._password is not None:
            user_info += ":" + self._password
        return user_info

    @property
    def authority(self) -> str:
        authority = self._host
        if self.user_info:
            authority = f"{self.user_info}@{authority}"
        if self._port is not None:
            authority += f":{self._port}"
        return authority

    @property
    def segments(self) -> List[str]:
        return self._path.strip("/").split("/")

    @property
    def basename(self) -> str:
        return self.segment(-1) or ""

    @property
    def dirname(self) -> str:
        return "/" + "/".join(self.segments[:-1])

    @property
    def first_segment(self) -> Optional[str]:
        segments = self.segments
        return segments[0] if segments else None

    @property
    def last_segment(self) -> Optional[str]:
        segments = self.segments
        return segments[-1] if segments else None

    def segment(self, index: int, default: Optional[str] = None) -> Optional[str]:
        """Return a path segment; 1 is the first, -1 the last. 0 is invalid."""

        if index == 0:
            raise InvalidArgument.segment_zero_does_not_exist()

        segments = self.segments
        if index < 0:
            segments = list(reversed(segments))
            index = abs(index)

        if index > len(segments):
            return default
        return segments[index - 1]

    def query_parameter(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._query.get(key, default)

    def has_query_parameter(self, key: str) -> bool:
        return self._query.has(key)

    def all_query_parameters(self) -> Dict[str, str]:
        return self._query.all()

    # ------------------------------------------------------------------
    # Mutators returning copies
    # ------------------------------------------------------------------
    def _clone(self) -> "Url":
        clone = Url()
        clone.__dict__.update(self.__dict__)
        clone._query = self._query.copy()
        return clone

    def with_scheme(self, scheme: str) -> "Url":
        url = self._clone()
        url._scheme = _sanitize_scheme(scheme)
        return url

    def with_user_info(self, user: str, password: Optional[str] = None) -> "Url":
        url = self._clone()
        url._user = user
        url._password = password
        return url

    def with_host(self, host: str) -> "Url":
        url = self._clone()
        url._host = host
        return url

    def with_port(self, port: Optional[int]) -> "Url":
        url = self._clone()
        url._port = port
        return url

    def with_path(self, path: str) -> "Url":
        url = self._clone()
        if not path.startswith("/"):
            path = "/" + path
        url._path = path
        return url

    def with_dirname(self, dirname: str) -> "Url":
        dirname = dirname.strip("/")
        if not self.basename:
            return self.with_path(dirname)
        return self.with_path(f"{dirname}/{self.basename}")

    def with_basename(self, basename: str) -> "Url":
        basename = basename.strip("/")
        if self.dirname == "/":
            return self.with_path("/" + basename)
        return self.with_path(f"{self.dirname}/{basename}")

    def with_query(self, query: str) -> "Url":
        url = self._clone()
        url._query = QueryParameters.from_string(query)
        return url

    def with_query_parameter(self, key: str, value: str) -> "Url":
        url = self._clone()
        url._query.unset(key).set(key, value)
        return url

    def without_query_parameter(self, key: str) -> "Url":
        url = self._clone()
        url._query.unset(key)
        return url

    def with_fragment(self, fragment: str) -> "Url":
        url = self._clone()
        url._fragment = fragment
        return url

    def matches(self, other: "Url") -> bool:
        return str(self) == str(other)

    def __str__(self) -> str:
        url = ""

        if self._scheme and self._scheme != "mailto":
            url += self._scheme + "://"

        if self._scheme == "mailto" and self._path:
            url += "mailto:"

        if not self._scheme and self.authority:
            url += "//"

        url += self.authority

        if self._path != "/":
            url += self._path

        if self.query:
            url += "?" + self.query

        if self._fragment:
            url += "#" + self._fragment

        return url

    def __repr__(self) -> str:
        return f"Url({str(self)!r})"


def _sanitize_scheme(scheme: str) -> str:
    scheme = scheme.lower()
    if scheme not in VALID_SCHEMES:
        raise InvalidArgument.invalid_scheme(scheme)
    return scheme


__all__ = ["QueryParameters", "Url", "VALID_SCHEMES"]
