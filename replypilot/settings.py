import os

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # core
    APP_NAME: str = Field(default="Reply Pilot")
    ENV: str = Field(default=os.getenv("APP_ENV", "dev"))
    DEBUG: bool = Field(default=True)
    LOG_LEVEL: str = Field(default="INFO")

    # remote service
    GEMINI_API_KEY: str | None = None
    GEMINI_MODEL: str = Field(default="gemini-2.5-flash-preview-09-2025")
    GEMINI_API_BASE: str = Field(default="https://generativelanguage.googleapis.com/v1beta")
    OPENAI_API_KEY: str | None = None
    OPENAI_MODEL: str = Field(default="gpt-4o-mini")
    USE_OLLAMA: bool = Field(default=False)
    OLLAMA_HOST: str = Field(default="http://localhost:11434")
    OLLAMA_MODEL: str = Field(default="mistral:7b-instruct")
    REQUEST_TIMEOUT: float = Field(default=60.0)

    # retry transport
    RETRY_MAX_ATTEMPTS: int = Field(default=3, ge=1)
    RETRY_INITIAL_DELAY_MS: int = Field(default=1000, ge=0)

    # content limits
    MAX_POST_CHARS: int = Field(default=300, gt=0)
    MIN_POST_TEXT_CHARS: int = Field(default=10, ge=0)
    MIN_EXTRACTED_CHARS: int = Field(default=5, ge=0)
    DEFAULT_TONE: str = Field(default="professional")

    # shared store between the feed watcher and the popup
    STORE_PATH: str = Field(default="data/shared_state.db")

    # read root-level .env.dev
    model_config = SettingsConfigDict(
        env_file=".env.dev",
        extra="ignore",
    )

    @property
    def app_name(self) -> str:
        return self.APP_NAME


settings = Settings()
