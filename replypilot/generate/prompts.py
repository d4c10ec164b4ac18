# Prompt fragments and reply schemas for the two request kinds.
# The builder returns plain strings/dataclasses; clients encode them as JSON,
# so user input is never spliced into a request body by hand.

from __future__ import annotations

from .types import GenerationPayload, GenerationRequest, RequestKind, ResponseSchema

SUGGESTION_COUNT = 3

ENGAGEMENT_RULES = """\
Rules:
- Never use generic praise like "Great post!" or "Agree 100%."
- Always provide insight, a thoughtful extension, or a gentle, high-value question.
"""


def build_system_instruction(tone: str) -> str:
    return f"""You are a world-class LinkedIn engagement assistant. Your goal is to generate human-like, authentic, and value-driven content.
The output MUST strictly follow the provided JSON schema.
Current Tone Profile: {tone}.
{ENGAGEMENT_RULES}"""


def build_user_query(request: GenerationRequest, max_post_chars: int) -> str:
    if request.kind == RequestKind.COMMENT:
        return (
            f"Based on the following LinkedIn post, provide exactly {SUGGESTION_COUNT} distinct, "
            "high-quality comment suggestions that fit the system instructions.\n"
            f'POST TEXT: "{request.input}"'
        )
    return (
        "Write a short, professional LinkedIn post on the following topic. "
        f"The post MUST NOT exceed {max_post_chars} characters in length. "
        "Include a thoughtful hook and a clear call to action or insight.\n"
        f'TOPIC: "{request.input}"'
    )


def build_response_schema(kind: RequestKind, max_post_chars: int) -> ResponseSchema:
    if kind == RequestKind.COMMENT:
        return ResponseSchema(
            kind=kind,
            field_name="suggestions",
            field_type="array",
            item_type="string",
            description="Exactly three distinct, professional comment suggestions.",
        )
    return ResponseSchema(
        kind=kind,
        field_name="output",
        field_type="string",
        description=f"The final LinkedIn post content, strictly under {max_post_chars} characters.",
    )


def build_payload(request: GenerationRequest, max_post_chars: int) -> GenerationPayload:
    return GenerationPayload(
        system_instruction=build_system_instruction(request.tone),
        user_query=build_user_query(request, max_post_chars),
        schema=build_response_schema(request.kind, max_post_chars),
    )
