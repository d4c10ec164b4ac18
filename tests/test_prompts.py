import json

from replypilot.generate.clients.gemini_client import GeminiClient
from replypilot.generate.prompts import (
    build_payload,
    build_response_schema,
    build_system_instruction,
    build_user_query,
)
from replypilot.generate.types import GenerationRequest, ModelParams, RequestKind


def test_comment_schema_is_array_of_strings():
    schema = build_response_schema(RequestKind.COMMENT, 300)
    assert schema.to_gemini() == {
        "type": "OBJECT",
        "properties": {
            "suggestions": {
                "type": "ARRAY",
                "description": "Exactly three distinct, professional comment suggestions.",
                "items": {"type": "STRING"},
            }
        },
    }
    js = schema.to_json_schema()
    assert js["properties"]["suggestions"]["items"] == {"type": "string"}
    assert js["required"] == ["suggestions"]


def test_post_schema_is_single_string():
    schema = build_response_schema(RequestKind.POST, 300)
    gemini = schema.to_gemini()
    assert list(gemini["properties"]) == ["output"]
    assert gemini["properties"]["output"]["type"] == "STRING"
    assert "items" not in gemini["properties"]["output"]
    assert "300" in gemini["properties"]["output"]["description"]


def test_system_instruction_carries_tone_and_rules():
    text = build_system_instruction("analytical")
    assert "Current Tone Profile: analytical." in text
    assert "Never use generic praise" in text
    assert "question" in text


def test_comment_query_embeds_post_text():
    req = GenerationRequest(RequestKind.COMMENT, "AI is changing how teams collaborate.", "analytical")
    query = build_user_query(req, 300)
    assert "exactly 3 distinct" in query
    assert 'POST TEXT: "AI is changing how teams collaborate."' in query


def test_post_query_mentions_limit_hook_and_cta():
    req = GenerationRequest(RequestKind.POST, "Remote onboarding", "friendly")
    query = build_user_query(req, 280)
    assert "MUST NOT exceed 280 characters" in query
    assert "hook" in query and "call to action" in query
    assert query.endswith('TOPIC: "Remote onboarding"')


def test_quotes_in_input_survive_request_encoding():
    tricky = 'She said "ship it" \\ then left }{ \n next line'
    req = GenerationRequest(RequestKind.COMMENT, tricky, "witty")
    payload = build_payload(req, 300)
    body = GeminiClient(api_key="k").build_body(payload, ModelParams(temperature=0.5))

    decoded = json.loads(json.dumps(body))
    sent = decoded["contents"][0]["parts"][0]["text"]
    assert tricky in sent
    assert decoded["generationConfig"]["responseMimeType"] == "application/json"
    assert decoded["generationConfig"]["responseSchema"] == payload.schema.to_gemini()
    assert decoded["systemInstruction"]["parts"][0]["text"] == payload.system_instruction
