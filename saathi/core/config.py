from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Base
    APP_ENV: str = "dev"  # dev | staging | prod | test
    APP_NAME: str = "Project Saathi API"
    APP_VERSION: str = "0.1.0"

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000"

    # Uploads (traités en mémoire, jamais stockés)
    MAX_UPLOAD_MB: int = 25

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # LLM (API compatible OpenAI)
    OPENAI_API_KEY: str = ""
    LLM_BASE_URL: Optional[str] = None
    LLM_MODEL: str = "gpt-4o-mini"
    LLM_TEMPERATURE: float = 0.2
    LLM_MAX_TOKENS: int = 2048
    LLM_FALLBACK: bool = True  # générateurs locaux si aucune clé

    # Limites de contexte envoyées au LLM
    DOCUMENT_CHAT_CONTEXT_CHARS: int = 15000
    QUIZ_SOURCE_CHARS: int = 20000

    # Scraping
    URL_FETCH_TIMEOUT: float = 10.0
    URL_USER_AGENT: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
    )

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache
def get_settings() -> Settings:
    return Settings()
