"""
Signing string construction

The signing string is the exact byte sequence that is signed and verified.
For each covered header, in order, one ``name: value`` line is emitted; lines
are joined by ``\\n`` with no trailing newline::

    (request-target): post /foo?param=value&pet=dog
    host: example.org
    date: Thu, 05 Jan 2012 21:31:40 GMT

Pseudo-headers:
    ``(request-target)``: lowercased method, a space, then the request target verbatim
    ``(created)``/``(expires)``: the signature's timestamps
"""

from collections.abc import Mapping
from typing import Any, Iterable, List, Optional, Protocol, Sequence, Tuple, Union, runtime_checkable

from ..exceptions import MissingRequiredHeaderError
from .types import CREATED, EXPIRES, REQUEST_TARGET, Signature
from .utils import format_timestamp, normalize_header_name


@runtime_checkable
class HeaderSource(Protocol):
    """Anything that can return a single header value by case-insensitive name"""

    def get_header(self, name: str) -> Optional[str]:
        """Return the header value, or ``None`` if the header is absent"""
        ...


class MappingHeaderSource:
    """
    HeaderSource over a mapping or a sequence of ``(name, value)`` pairs

    Lookup is case-insensitive. Repeated headers and list values are joined
    with ``", "`` in the order they were supplied. Byte values are decoded as
    latin-1, the way HTTP clients put them on the wire.
    """

    def __init__(self, headers: Union[Mapping, Iterable[Tuple[str, Any]]]):
        items = headers.items() if isinstance(headers, Mapping) else headers
        values = {}
        for name, value in items:
            key = normalize_header_name(_header_text(name))
            if isinstance(value, (list, tuple)):
                parts = [_header_text(v) for v in value]
            else:
                parts = [_header_text(value)]
            values.setdefault(key, []).extend(parts)
        self._headers = {name: ", ".join(parts) for name, parts in values.items()}

    def get_header(self, name: str) -> Optional[str]:
        return self._headers.get(normalize_header_name(name))

    def __contains__(self, name: str) -> bool:
        return normalize_header_name(name) in self._headers


HeadersLike = Union[HeaderSource, Mapping, Iterable[Tuple[str, Any]]]


def as_header_source(headers: Optional[HeadersLike]) -> HeaderSource:
    """
    Coerce a headers argument into a :class:`HeaderSource`.

    Args:
        headers: A HeaderSource, a mapping (``dict``, ``CaseInsensitiveDict``)
            or a sequence of ``(name, value)`` pairs. ``None`` means no headers.
    """
    if headers is None:
        return MappingHeaderSource({})
    if isinstance(headers, HeaderSource):
        return headers
    return MappingHeaderSource(headers)


def build_signing_string(
    method: str,
    uri: str,
    headers: Optional[HeadersLike],
    covered_headers: Sequence[str],
    signature: Optional[Signature] = None
) -> str:
    """
    Build the signing string for a request.

    Args:
        method: HTTP method, case-insensitive
        uri: Request target as sent on the wire (path and query)
        headers: Request headers
        covered_headers: Lowercased header names in signing order
        signature: Supplies ``(created)``/``(expires)`` values

    Returns:
        str: Signing string

    Raises:
        MissingRequiredHeaderError: If a covered header has no value
    """
    source = as_header_source(headers)
    lines: List[str] = []

    for name in covered_headers:
        name = normalize_header_name(name)
        lines.append(f"{name}: {_component_value(name, method, uri, source, signature)}")

    return "\n".join(lines)


def build_signing_string_for(
    signature: Signature,
    method: str,
    uri: str,
    headers: Optional[HeadersLike]
) -> str:
    """Signing string for the headers covered by ``signature``."""
    return build_signing_string(method, uri, headers, signature.headers, signature)


def _component_value(
    name: str,
    method: str,
    uri: str,
    source: HeaderSource,
    signature: Optional[Signature]
) -> str:
    if name == REQUEST_TARGET:
        return f"{method.lower()} {uri}"

    if name == CREATED:
        if signature is None or signature.created is None:
            raise MissingRequiredHeaderError(name)
        return str(signature.created)

    if name == EXPIRES:
        if signature is None or signature.expires is None:
            raise MissingRequiredHeaderError(name)
        return format_timestamp(signature.expires)

    value = source.get_header(name)
    if value is None:
        raise MissingRequiredHeaderError(name)
    return value.strip()


def _header_text(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("latin-1")
    return str(value)
