"""
Request model.

Each HTTP method is its own dataclass. GET and DELETE have no body
attribute at all, POST and PUT require one, so a body-less request can
never silently acquire a body.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, List, Optional, Union


class RequestMethod(str, Enum):
    """Supported request methods."""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


@dataclass(frozen=True)
class Header:
    """Single header line. Names are kept exactly as given."""
    name: str
    value: str


class _HeadersMixin:
    """Multimap helpers over the ordered `headers` list."""

    headers: List[Header]

    def add_header(self, name: str, value: str) -> None:
        """Append a header. Existing headers with the same name are kept."""
        self.headers.append(Header(name, value))

    def get_headers(self, name: str) -> List[str]:
        """All values for `name` (case-insensitive), in insertion order."""
        lowered = name.lower()
        return [h.value for h in self.headers if h.name.lower() == lowered]

    def get_header(self, name: str) -> Optional[str]:
        """First value for `name` or None."""
        values = self.get_headers(name)
        return values[0] if values else None


@dataclass
class GetRequest(_HeadersMixin):
    """GET request."""
    url: str
    headers: List[Header] = field(default_factory=list)

    method: ClassVar[RequestMethod] = RequestMethod.GET


@dataclass
class DeleteRequest(_HeadersMixin):
    """DELETE request."""
    url: str
    headers: List[Header] = field(default_factory=list)

    method: ClassVar[RequestMethod] = RequestMethod.DELETE


@dataclass
class _BodyRequest(_HeadersMixin):
    url: str
    body: str
    headers: List[Header] = field(default_factory=list)

    def __post_init__(self):
        if not isinstance(self.body, str):
            raise TypeError(
                f"{self.__class__.__name__} body must be str "
                f"(got {type(self.body).__name__}); encode structured data before sending"
            )


@dataclass
class PostRequest(_BodyRequest):
    """POST request. `body` is sent as raw UTF-8, already encoded by the caller."""

    method: ClassVar[RequestMethod] = RequestMethod.POST


@dataclass
class PutRequest(_BodyRequest):
    """PUT request. `body` is sent as raw UTF-8, already encoded by the caller."""

    method: ClassVar[RequestMethod] = RequestMethod.PUT


Request = Union[GetRequest, PostRequest, PutRequest, DeleteRequest]
RequestWithBody = Union[PostRequest, PutRequest]

REQUEST_TYPES = (GetRequest, PostRequest, PutRequest, DeleteRequest)
BODY_REQUEST_TYPES = (PostRequest, PutRequest)
