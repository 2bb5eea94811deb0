"""Query string decoding.

``parse_query`` is the pipeline's query decoder: a plain dict where a
repeated name maps to a list of its values, in order.
``QueryParams`` is the read-only view attached to ``Request``. It holds
the raw bytes and decodes them with the same strict UTF-8 rules on
first access.
"""

from collections.abc import Iterator, Mapping
from urllib.parse import parse_qs

from tern._internal.types import QueryDict
from tern.errors import DecodeError


def collapse(parsed: Mapping[str, list[str]]) -> QueryDict:
    """Single values become strings, repeated values stay lists."""
    return {key: values[0] if len(values) == 1 else list(values) for key, values in parsed.items()}


def _decode(raw: bytes | str) -> dict[str, list[str]]:
    try:
        text = raw.decode("utf-8") if isinstance(raw, bytes) else raw
        return parse_qs(text, keep_blank_values=True, errors="strict")
    except (UnicodeDecodeError, ValueError) as exc:
        msg = f"Malformed query string: {exc}"
        raise DecodeError(msg) from exc


def parse_query(raw: bytes | str) -> QueryDict:
    """Decode a raw query string.

    ``"a=1&b=2&b=3"`` -> ``{"a": "1", "b": ["2", "3"]}``. Blank values
    are kept as empty strings.
    """
    return collapse(_decode(raw))


class QueryParams(Mapping[str, str]):
    """Immutable query string parameters.

    ``__getitem__`` returns the first value for a key.
    ``get_list`` returns all values for a key.
    Lookups raise ``DecodeError`` when the raw query is malformed.
    """

    __slots__ = ("_data", "_raw")

    def __init__(self, query_string: bytes = b"") -> None:
        object.__setattr__(self, "_raw", query_string)
        object.__setattr__(self, "_data", None)

    @property
    def _parsed(self) -> dict[str, list[str]]:
        if self._data is None:
            object.__setattr__(self, "_data", _decode(self._raw))
        return self._data

    def __getitem__(self, key: str) -> str:
        return self._parsed[key][0]

    def __contains__(self, key: object) -> bool:
        return key in self._parsed

    def __iter__(self) -> Iterator[str]:
        return iter(self._parsed)

    def __len__(self) -> int:
        return len(self._parsed)

    def __repr__(self) -> str:
        return f"QueryParams({self._raw!r})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        values = self._parsed.get(key)
        if values:
            return values[0]
        return default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        return list(self._parsed.get(key, []))

    @property
    def raw(self) -> bytes:
        return self._raw
