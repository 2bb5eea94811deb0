"""Handler return values to responses.

isinstance-based dispatch, no magic, fully predictable:

1. ``Response`` / ``StreamingResponse`` -> pass through
2. ``Redirect``           -> 3xx with Location header
3. ``str``                -> 200, text/html
4. ``bytes``              -> 200, application/octet-stream
5. ``dict`` / ``list``    -> 200, application/json
6. ``(value, int)``       -> convert value, override status
7. ``None``               -> 204, empty body
"""

import json as json_module
from typing import Any

from tern.http.response import AnyResponse, Redirect, Response, StreamingResponse


def to_response(value: Any) -> AnyResponse:
    """Convert a handler's return value to a response.

    Raises ``TypeError`` for values with no response form.
    """
    match value:
        case Response() | StreamingResponse():
            return value
        case Redirect():
            return value.to_response()
        case None:
            return Response(body="", status=204)
        case str():
            return Response(body=value)
        case bytes():
            return Response(body=value, content_type="application/octet-stream")
        case dict() | list():
            return Response(
                body=json_module.dumps(value),
                content_type="application/json",
            )
        case (inner, int() as status):
            return to_response(inner).with_status(status)
    msg = f"Cannot convert handler return value of type {type(value).__name__} to a response"
    raise TypeError(msg)
