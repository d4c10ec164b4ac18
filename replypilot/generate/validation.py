"""Decode the service's text payload into a typed result.

The schema sent with the request is only a hint to the service; this module is
where the reply shape is actually enforced.
"""

from __future__ import annotations

import json
from typing import Any, Optional

from .errors import EnvelopeError, ReplyValidationError
from .types import PostDraft, RequestKind, ResponseSchema, Suggestions


def parse_payload(text: Optional[str]) -> Any:
    """Parse the JSON text taken from the reply envelope."""
    if not text:
        raise EnvelopeError("Could not parse text response from API.")
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise EnvelopeError(f"Reply text is not valid JSON: {e.msg} at position {e.pos}") from e


def decode_reply(data: Any, schema: ResponseSchema, max_post_chars: int):
    if not isinstance(data, dict):
        raise ReplyValidationError(f"Expected a JSON object, got {type(data).__name__}")

    if schema.field_name not in data:
        raise ReplyValidationError(f"Reply has no '{schema.field_name}' field")
    value = data[schema.field_name]

    if schema.kind == RequestKind.COMMENT:
        return _decode_suggestions(value, schema.field_name)
    if schema.kind == RequestKind.POST:
        return _decode_post(value, schema.field_name, max_post_chars)
    raise ReplyValidationError(f"Unknown request kind: {schema.kind}")


def _decode_suggestions(value: Any, name: str) -> Suggestions:
    if not isinstance(value, list):
        raise ReplyValidationError(f"'{name}' is present but is {type(value).__name__}, not a list")
    # any count is accepted, the service is only asked for three
    items = [v for v in value if isinstance(v, str) and v.strip()]
    if not items:
        raise ReplyValidationError(f"'{name}' is present but holds no string entries")
    return Suggestions(items=items)


def _decode_post(value: Any, name: str, max_post_chars: int) -> PostDraft:
    if not isinstance(value, str):
        raise ReplyValidationError(f"'{name}' is present but is {type(value).__name__}, not a string")
    if not value.strip():
        raise ReplyValidationError(f"'{name}' is present but empty")
    return PostDraft(text=value, over_limit=len(value) > max_post_chars, max_chars=max_post_chars)
