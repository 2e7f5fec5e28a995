"""HTTP response values returned by the request handlers."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

JSON_CONTENT_TYPE = "application/json"
TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"

# Characters escaped inside JSON strings so the output is safe to embed in HTML.
_HTML_ESCAPES = (
    ("&", "\\u0026"),
    ("<", "\\u003c"),
    (">", "\\u003e"),
    ("\u2028", "\\u2028"),
    ("\u2029", "\\u2029"),
)


def _encode_json(payload: Any) -> str:
    text = json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
    for char, escaped in _HTML_ESCAPES:
        text = text.replace(char, escaped)
    return text


@dataclass(frozen=True)
class JsonResponse:
    """A status code with a payload and its content type.

    A ``str`` payload with a non-JSON content type is sent as plain text;
    anything else is encoded as compact JSON. Either way the body ends with
    a newline.
    """

    status: int
    payload: Any
    content_type: str = JSON_CONTENT_TYPE

    def body(self) -> bytes:
        """Return the encoded response body."""
        if isinstance(self.payload, str) and self.content_type != JSON_CONTENT_TYPE:
            text = self.payload
        else:
            text = _encode_json(self.payload)
        return (text + "\n").encode("utf-8")