# Dummy model client for local dev and tests without API calls.
# Replies with schema-shaped JSON built from the user query.

import json
from typing import Any, Dict, Optional, Tuple

from ..types import GenerationPayload, ModelParams, RequestKind


class EchoDevClient:
    def __init__(self):
        self.model = "echo-dev"

    def generate(self, payload: GenerationPayload, params: ModelParams) -> Tuple[Optional[str], Dict[str, Any]]:
        last_line = payload.user_query.strip().splitlines()[-1]
        if payload.schema.kind == RequestKind.COMMENT:
            body = {"suggestions": [f"[ECHO {i}] {last_line}" for i in range(1, 4)]}
        else:
            body = {"output": f"[ECHO] {last_line}"}
        meta = {"engine": "echo", "model": "echo-dev", "temp": params.temperature, "max_tokens": params.max_tokens}
        return json.dumps(body), meta
