"""Form-style query string building.

:func:`build_query` flattens nested parameters into bracketed keys the way
most web frameworks parse them back (``tags[0]=a&filter[name]=x``), and
:func:`append_query` glues the result onto a URL. Encoding is deterministic:
keys keep their insertion order, so the same mapping always produces the
same URL and therefore the same cache key.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any, Optional
from urllib.parse import quote_plus


def _scalar(value: Any) -> str:
    if value is True:
        return "1"
    if value is False:
        return "0"
    return str(value)


def _flatten(prefix: str, value: Any) -> Iterator[tuple[str, str]]:
    if value is None:
        return
    if isinstance(value, Mapping):
        for key, item in value.items():
            yield from _flatten(f"{prefix}[{key}]", item)
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            yield from _flatten(f"{prefix}[{index}]", item)
    else:
        yield prefix, _scalar(value)


def build_query(params: Optional[Mapping[Any, Any]]) -> str:
    """Encode *params* as a query string without the leading ``?``.

    Args:
        params: Query parameters. Values may be scalars, lists, or nested
            mappings. ``None`` values are skipped; booleans become ``1``/``0``.

    Returns:
        The encoded query string, or ``""`` for an empty/absent mapping.

    Example::

        >>> build_query({"id": 22})
        'id=22'
        >>> build_query({"tags": ["a", "b"]})
        'tags%5B0%5D=a&tags%5B1%5D=b'
    """
    if not params:
        return ""
    pairs: list[str] = []
    for key, value in params.items():
        for name, text in _flatten(str(key), value):
            pairs.append(f"{quote_plus(name)}={quote_plus(text)}")
    return "&".join(pairs)


def append_query(url: str, params: Optional[Mapping[Any, Any]]) -> str:
    """Return *url* with the encoded *params* appended.

    The URL is returned unchanged when there is nothing to encode. If it
    already carries a query string the new pairs are joined with ``&``.
    """
    query = build_query(params)
    if not query:
        return url
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{query}"
