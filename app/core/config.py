import os
from functools import lru_cache
from typing import List

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Voiceflow endpoints
    VOICEFLOW_KB_QUERY_URL: str = "https://general-runtime.voiceflow.com/knowledge-base/query"
    VOICEFLOW_TRANSCRIPTS_URL: str = "https://api.voiceflow.com/v2/transcripts"
    VOICEFLOW_CREATOR_URL: str = "https://creator.voiceflow.com"

    # Knowledge base query settings
    KB_MODEL: str = "gpt-4o-mini"
    KB_TEMPERATURE: float = 0.2
    KB_CHUNK_LIMIT: int = 2

    # Outbound timeouts (seconds)
    UPSTREAM_TIMEOUT: float = 15.0
    TITLE_TIMEOUT: float = 5.0

    # Some sites reject default/bot agents
    TITLE_USER_AGENT: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )

    # Server
    CORS_ORIGINS: List[str] = ["*"]
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"
    HTTPX_LOG_LEVEL: str = "WARNING"

    # General
    ENV: str = os.getenv("ENV", "development")
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Ensure .env is loaded once
    load_dotenv(override=False)
    return Settings()
