# Client for the Gemini generateContent REST endpoint with structured output.
# Exposes generate(payload, params) like the other clients.

from typing import Any, Dict, Optional, Tuple

import requests

from ..types import GenerationPayload, ModelParams

GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta"


class GeminiClient:
    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash-preview-09-2025",
        api_base: str = GEMINI_API_BASE,
        timeout: float = 60.0,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def set_model(self, model: str):
        self.model = model

    @property
    def url(self) -> str:
        return f"{self.api_base}/models/{self.model}:generateContent"

    def build_body(self, payload: GenerationPayload, params: ModelParams) -> Dict[str, Any]:
        generation_config: Dict[str, Any] = {
            "responseMimeType": "application/json",
            "responseSchema": payload.schema.to_gemini(),
        }
        if params.temperature is not None:
            generation_config["temperature"] = float(params.temperature)
        if params.max_tokens is not None:
            generation_config["maxOutputTokens"] = int(params.max_tokens)
        return {
            "contents": [{"parts": [{"text": payload.user_query}]}],
            "systemInstruction": {"parts": [{"text": payload.system_instruction}]},
            "generationConfig": generation_config,
        }

    def generate(self, payload: GenerationPayload, params: ModelParams) -> Tuple[Optional[str], Dict[str, Any]]:
        resp = self.session.post(
            self.url,
            params={"key": self.api_key},
            json=self.build_body(payload, params),
            timeout=self.timeout,
        )
        resp.raise_for_status()
        meta = {"engine": "gemini", "model": self.model}
        try:
            data = resp.json()
        except ValueError:
            # 2xx with a non-JSON body
            return None, meta
        return extract_text(data), meta


def extract_text(envelope: Any) -> Optional[str]:
    """candidates[0].content.parts[0].text, or None when any step is missing."""
    try:
        text = envelope["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    return text if isinstance(text, str) else None
