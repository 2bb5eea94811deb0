"""Request body decoding, driven by Content-Type.

URL-encoded forms use stdlib ``urllib.parse``; JSON uses stdlib
``json``. Anything else decodes to an empty mapping.
"""

import json as json_module
from typing import Any
from urllib.parse import parse_qs

from tern.errors import DecodeError
from tern.http.query import collapse

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
JSON_CONTENT_TYPE = "application/json"

# Methods whose body the pipeline decodes before interceptors run
BODY_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})


def media_type(content_type: str | None) -> str:
    """``"application/json; charset=utf-8"`` -> ``"application/json"``."""
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


def decode_body(raw: bytes, content_type: str | None) -> dict[str, Any]:
    """Decode *raw* according to *content_type*.

    Returns:
        Form fields (repeated names become lists) for URL-encoded bodies,
        the parsed object for JSON bodies, ``{}`` for other types or an
        empty body.

    Raises:
        DecodeError: If the payload is malformed, or a JSON body is not
            an object.
    """
    kind = media_type(content_type)
    if not raw or kind not in (FORM_CONTENT_TYPE, JSON_CONTENT_TYPE):
        return {}

    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        msg = f"Request body is not valid UTF-8: {exc}"
        raise DecodeError(msg) from exc

    if kind == FORM_CONTENT_TYPE:
        try:
            return collapse(parse_qs(text, keep_blank_values=True, errors="strict"))
        except (UnicodeDecodeError, ValueError) as exc:
            msg = f"Malformed form body: {exc}"
            raise DecodeError(msg) from exc

    try:
        value = json_module.loads(text)
    except json_module.JSONDecodeError as exc:
        msg = f"Malformed JSON body: {exc}"
        raise DecodeError(msg) from exc
    if not isinstance(value, dict):
        msg = f"JSON body must be an object, got {type(value).__name__}"
        raise DecodeError(msg)
    return value
