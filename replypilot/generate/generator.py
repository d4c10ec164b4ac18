# SuggestionGenerator:
# - accepts any model client (Gemini, OpenAI, Ollama, Echo)
# - builds system instruction + user query + schema per request kind
# - calls the client through the retrying transport
# - returns a typed GenerationResult, never raises for remote failures

from __future__ import annotations
import os
from pathlib import Path
from typing import Callable, Optional

import yaml

from replypilot.log import get_logger
from replypilot.settings import Settings, settings as default_settings
from .errors import EnvelopeError, GenerationError, InputError, TransportError
from .guard import TriggerGuard
from .prompts import build_payload
from .retry import with_retry
from .types import Failure, GenerationRequest, GenerationResult, ModelParams, RequestKind
from .validation import decode_reply, parse_payload

logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).with_name("config.yaml")


class SuggestionGenerator:
    def __init__(
        self,
        model_client,
        cfg: Optional[Settings] = None,
        guard: Optional[TriggerGuard] = None,
        config_path: Optional[str] = None,
        sleep: Optional[Callable[[float], None]] = None,
    ):
        self.model_client = model_client
        self.settings = cfg or default_settings
        self.guard = guard or TriggerGuard()
        self.config_path = str(config_path or DEFAULT_CONFIG_PATH)
        self.cfg = self._load_config()
        self._sleep = sleep

    def _load_config(self) -> dict:
        if not os.path.exists(self.config_path):
            return {}
        with open(self.config_path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    def _params(self, kind: RequestKind) -> ModelParams:
        per_kind = self.cfg.get(kind.value, {}) or {}
        return ModelParams(
            temperature=per_kind.get("temperature", self.cfg.get("temperature")),
            max_tokens=per_kind.get("max_tokens", self.cfg.get("max_tokens")),
        )

    def check_input(self, request: GenerationRequest):
        """Caller-side checks done before any network call."""
        text = (request.input or "").strip()
        if not text:
            raise InputError(f"Empty input for {request.kind.value} request")
        if request.kind == RequestKind.COMMENT and len(text) < self.settings.MIN_POST_TEXT_CHARS:
            raise InputError(
                f"Post text is too short ({len(text)} chars, need {self.settings.MIN_POST_TEXT_CHARS})"
            )
        if request.kind == RequestKind.POST and len(text) > self.settings.MAX_POST_CHARS:
            raise InputError(f"Topic is {len(text)} chars, over the {self.settings.MAX_POST_CHARS} limit")

    def _call(self, request: GenerationRequest) -> GenerationResult:
        max_chars = self.settings.MAX_POST_CHARS
        payload = build_payload(request, max_chars)
        params = self._params(request.kind)

        retry_kwargs = {}
        if self._sleep is not None:
            retry_kwargs["sleep"] = self._sleep
        try:
            text, meta = with_retry(
                lambda: self.model_client.generate(payload, params),
                max_attempts=self.settings.RETRY_MAX_ATTEMPTS,
                initial_delay_ms=self.settings.RETRY_INITIAL_DELAY_MS,
                **retry_kwargs,
            )
        except Exception as e:
            raise TransportError(str(e) or type(e).__name__) from e

        logger.debug("Reply from %s: %r", meta.get("engine"), (text or "")[:200])
        if text is None:
            raise EnvelopeError("Could not parse text response from API.")
        return decode_reply(parse_payload(text), payload.schema, max_chars)

    def generate(self, request: GenerationRequest) -> GenerationResult:
        """Main entry point: one request in, one typed result out."""
        try:
            self.check_input(request)
            with self.guard.busy(request.kind):
                result = self._call(request)
        except GenerationError as e:
            logger.error("%s failure for %s request: %s", e.kind.value, request.kind.value, e)
            return Failure(kind=e.kind, message=str(e))

        if getattr(result, "over_limit", False):
            logger.warning(
                "Generated post is %d characters (over %d limit)", len(result.text), self.settings.MAX_POST_CHARS
            )
        return result
