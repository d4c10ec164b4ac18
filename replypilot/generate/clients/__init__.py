# Model clients. Each exposes generate(payload, params) -> (text, meta),
# where text is the JSON payload from the reply envelope or None if absent.

from replypilot.settings import Settings

from .echo_dev_client import EchoDevClient
from .gemini_client import GeminiClient


def build_model_client(cfg: Settings):
    """Pick a client from settings: Ollama if asked, then Gemini, OpenAI, echo."""
    if cfg.USE_OLLAMA:
        from .ollama_client import OllamaClient
        return OllamaClient(model=cfg.OLLAMA_MODEL, host=cfg.OLLAMA_HOST, timeout=cfg.REQUEST_TIMEOUT)
    if cfg.GEMINI_API_KEY:
        return GeminiClient(
            api_key=cfg.GEMINI_API_KEY,
            model=cfg.GEMINI_MODEL,
            api_base=cfg.GEMINI_API_BASE,
            timeout=cfg.REQUEST_TIMEOUT,
        )
    if cfg.OPENAI_API_KEY:
        from .openai_client import OpenAIClient
        return OpenAIClient(model=cfg.OPENAI_MODEL, api_key=cfg.OPENAI_API_KEY, timeout=cfg.REQUEST_TIMEOUT)
    return EchoDevClient()


__all__ = ["EchoDevClient", "GeminiClient", "build_model_client"]
