# Generation package

# Exposes the pipeline entry point and its result types.

from .generator import SuggestionGenerator
from .guard import TriggerGuard
from .retry import with_retry
from .types import (
    Failure,
    FailureKind,
    GenerationRequest,
    GenerationResult,
    ModelParams,
    PostDraft,
    RequestKind,
    Suggestions,
)
from .clients import EchoDevClient, build_model_client

__all__ = [
    "SuggestionGenerator",
    "TriggerGuard",
    "with_retry",
    "Failure",
    "FailureKind",
    "GenerationRequest",
    "GenerationResult",
    "ModelParams",
    "PostDraft",
    "RequestKind",
    "Suggestions",
    "EchoDevClient",
    "build_model_client",
]
