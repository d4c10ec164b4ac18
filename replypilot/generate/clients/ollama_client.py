# Client for Ollama local inference. /api/chat accepts a JSON schema in
# `format`, which gives the same structured reply as the hosted services.

from typing import Any, Dict, Optional, Tuple

import requests

from ..types import GenerationPayload, ModelParams


class OllamaClient:
    def __init__(self, model: str = "mistral:7b-instruct", host: str = "http://localhost:11434", timeout: float = 180):
        self.model = model
        self.host = host.rstrip("/")
        self.timeout = timeout

    def set_model(self, model: str):
        self.model = model

    def generate(self, payload: GenerationPayload, params: ModelParams) -> Tuple[Optional[str], Dict[str, Any]]:
        body = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": payload.system_instruction},
                {"role": "user", "content": payload.user_query},
            ],
            "format": payload.schema.to_json_schema(),
            "stream": False,
            "options": {
                "temperature": float(params.temperature or 0.7),
                "num_predict": int(params.max_tokens or 1000),
            },
        }
        resp = requests.post(f"{self.host}/api/chat", json=body, timeout=self.timeout)
        resp.raise_for_status()
        meta = {"engine": "ollama", "model": self.model}
        try:
            data = resp.json()
        except ValueError:
            return None, meta
        text = (data.get("message") or {}).get("content") if isinstance(data, dict) else None
        return text, meta
