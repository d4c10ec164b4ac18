"""Exceptions raised inside the generation pipeline.

They never leave ``SuggestionGenerator.generate``: each one is turned into a
``Failure`` result carrying the matching ``FailureKind``.
"""

from .types import FailureKind


class GenerationError(Exception):
    kind: FailureKind = FailureKind.TRANSPORT


class TransportError(GenerationError):
    """Network error or non-2xx status from the remote service."""
    kind = FailureKind.TRANSPORT


class EnvelopeError(GenerationError):
    """Reply envelope has no text payload, or the payload is not JSON."""
    kind = FailureKind.PARSE


class ReplyValidationError(GenerationError):
    """Parsed JSON does not have the shape the request kind expects."""
    kind = FailureKind.VALIDATION


class InputError(GenerationError):
    kind = FailureKind.INPUT


class TriggerBusyError(GenerationError):
    """A generation of the same kind is already in flight."""
    kind = FailureKind.BUSY
