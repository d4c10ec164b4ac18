# Typed dataclasses shared across the generation modules.

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union


class RequestKind(str, Enum):
    COMMENT = "comment"
    POST = "post"


class FailureKind(str, Enum):
    TRANSPORT = "transport"
    PARSE = "parse"
    VALIDATION = "validation"
    INPUT = "input"
    BUSY = "busy"


@dataclass
class GenerationRequest:
    """What the user asked for: post text (comment) or a topic (post)."""
    kind: RequestKind
    input: str
    tone: str


@dataclass
class ModelParams:
    """LLM parameters per request."""
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None


@dataclass
class ResponseSchema:
    """Expected reply shape for one request kind.

    ``field_name`` is the single top-level property; ``item_type`` is set only for
    array fields. The same object instructs the service and validates the reply.
    """
    kind: RequestKind
    field_name: str
    field_type: str
    description: str
    item_type: Optional[str] = None

    def to_gemini(self) -> Dict[str, Any]:
        prop: Dict[str, Any] = {"type": self.field_type.upper(), "description": self.description}
        if self.item_type:
            prop["items"] = {"type": self.item_type.upper()}
        return {"type": "OBJECT", "properties": {self.field_name: prop}}

    def to_json_schema(self) -> Dict[str, Any]:
        prop: Dict[str, Any] = {"type": self.field_type, "description": self.description}
        if self.item_type:
            prop["items"] = {"type": self.item_type}
        return {
            "type": "object",
            "properties": {self.field_name: prop},
            "required": [self.field_name],
            "additionalProperties": False,
        }


@dataclass
class GenerationPayload:
    """Everything sent to the remote service for one request."""
    system_instruction: str
    user_query: str
    schema: ResponseSchema


@dataclass
class Suggestions:
    items: List[str]


@dataclass
class PostDraft:
    text: str
    # set when the service ignored the length instruction
    over_limit: bool = False
    max_chars: Optional[int] = None


@dataclass
class Failure:
    kind: FailureKind
    message: str
    meta: Dict[str, Any] = field(default_factory=dict)


GenerationResult = Union[Suggestions, PostDraft, Failure]
