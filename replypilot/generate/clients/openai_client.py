# Client for the OpenAI Chat Completions API using json_schema structured output.
# Same interface as GeminiClient.

from typing import Any, Dict, Optional, Tuple

from openai import OpenAI

from ..types import GenerationPayload, ModelParams


class OpenAIClient:
    def __init__(self, model: str = "gpt-4o-mini", api_key: Optional[str] = None, timeout: float = 60.0):
        self.model = model
        self.client = OpenAI(api_key=api_key, timeout=timeout)

    def set_model(self, model: str):
        self.model = model

    def generate(self, payload: GenerationPayload, params: ModelParams) -> Tuple[Optional[str], Dict[str, Any]]:
        resp = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": payload.system_instruction},
                {"role": "user", "content": payload.user_query},
            ],
            temperature=params.temperature or 0.7,
            max_tokens=params.max_tokens or 1000,
            response_format={
                "type": "json_schema",
                "json_schema": {
                    "name": f"{payload.schema.kind.value}_reply",
                    "schema": payload.schema.to_json_schema(),
                    "strict": True,
                },
            },
        )
        text = resp.choices[0].message.content if resp.choices else None
        return text, {"engine": "openai", "model": self.model}
