import pytest

from replypilot.generate.errors import EnvelopeError, ReplyValidationError
from replypilot.generate.prompts import build_response_schema
from replypilot.generate.types import PostDraft, RequestKind, Suggestions
from replypilot.generate.validation import decode_reply, parse_payload

COMMENT = build_response_schema(RequestKind.COMMENT, 300)
POST = build_response_schema(RequestKind.POST, 300)


def test_two_suggestions_are_accepted():
    assert decode_reply({"suggestions": ["a", "b"]}, COMMENT, 300) == Suggestions(["a", "b"])


def test_non_string_entries_are_dropped():
    out = decode_reply({"suggestions": ["a", 3, None, "  ", "b"]}, COMMENT, 300)
    assert out.items == ["a", "b"]


def test_absent_field_is_reported_as_missing():
    with pytest.raises(ReplyValidationError, match="no 'suggestions' field"):
        decode_reply({}, COMMENT, 300)


@pytest.mark.parametrize("value", [[], [1, 2], "one suggestion", {"a": 1}])
def test_present_but_wrong_shape(value):
    with pytest.raises(ReplyValidationError, match="present"):
        decode_reply({"suggestions": value}, COMMENT, 300)


def test_non_object_reply():
    with pytest.raises(ReplyValidationError):
        decode_reply(["a", "b"], COMMENT, 300)


def test_post_requires_string_output():
    with pytest.raises(ReplyValidationError):
        decode_reply({"output": ["x"]}, POST, 300)
    with pytest.raises(ReplyValidationError):
        decode_reply({"suggestions": ["x"]}, POST, 300)


def test_post_over_limit_is_flagged_not_rejected():
    out = decode_reply({"output": "x" * 301}, POST, 300)
    assert isinstance(out, PostDraft)
    assert out.over_limit is True
    assert out.max_chars == 300


def test_post_at_limit_is_fine():
    assert decode_reply({"output": "x" * 300}, POST, 300).over_limit is False


@pytest.mark.parametrize("text", [None, "", "not json", "{'single': 'quotes'}"])
def test_parse_payload_rejects_missing_or_invalid_text(text):
    with pytest.raises(EnvelopeError):
        parse_payload(text)


def test_parse_payload_reads_json():
    assert parse_payload('{"output": "hi"}') == {"output": "hi"}
