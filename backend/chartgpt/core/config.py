from pathlib import Path

from pydantic_settings import BaseSettings
from dotenv import load_dotenv

ENV_FILE = Path(__file__).resolve().parents[3] / ".env"
load_dotenv(dotenv_path=ENV_FILE)


class Settings(BaseSettings):
    # Chart generation
    CHART_DEFAULT_LLM: str = "openai"
    CHART_DEFAULT_MODEL: str = "gpt-4o-mini"
    # Optional per-call overrides; empty means CHART_DEFAULT_MODEL
    CHART_CLASSIFIER_MODEL: str = ""
    CHART_GENERATOR_MODEL: str = ""
    CHART_TEMPERATURE: float = 0.0
    CHART_MAX_TOKENS: int = 2048
    # In-memory chart sessions kept before the least recently used is evicted
    CHART_MAX_SESSIONS: int = 1000

    # Server-side provider credentials, overridden per request by a user key
    OPENAI_API_KEY: str = ""
    XAI_API_KEY: str = ""
    ANTHROPIC_API_KEY: str = ""

    # HTTP
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    CORS_ALLOW_ORIGINS: str = "*"
    LOG_LEVEL: str = "INFO"

    # PNG export
    EXPORT_DPI: int = 140

    @property
    def cors_origins(self) -> list[str]:
        origins = [item.strip() for item in (self.CORS_ALLOW_ORIGINS or "").split(",")]
        return [origin for origin in origins if origin]

    class Config:
        env_file = str(ENV_FILE)
        extra = "ignore"


settings = Settings()
