from typing import Iterator

import httpx
from fastapi import Depends

from saathi.core.config import Settings, get_settings
from saathi.services.chat_service import ChatService
from saathi.services.llm import LLMClient
from saathi.services.notes_service import NotesService
from saathi.services.quiz_service import QuizService
from saathi.services.roadmap_service import RoadmapService


def get_settings_dep() -> Settings:
    return get_settings()


def get_llm_client() -> LLMClient:
    """
    Fournit le client LLM en dépendance (DI), remplaçable en tests.
    """
    settings = get_settings()
    return LLMClient(
        api_key=settings.OPENAI_API_KEY,
        model=settings.LLM_MODEL,
        base_url=settings.LLM_BASE_URL,
        temperature=settings.LLM_TEMPERATURE,
        max_tokens=settings.LLM_MAX_TOKENS,
    )


def get_http_client() -> Iterator[httpx.Client]:
    """
    Client HTTP pour le scraping (fermé en fin de requête).
    """
    settings = get_settings()
    with httpx.Client(
        headers={"User-Agent": settings.URL_USER_AGENT},
        timeout=settings.URL_FETCH_TIMEOUT,
        follow_redirects=True,
    ) as client:
        yield client


def get_chat_service(
    llm: LLMClient = Depends(get_llm_client),
    settings: Settings = Depends(get_settings_dep),
) -> ChatService:
    return ChatService(llm, use_fallback=settings.LLM_FALLBACK, context_chars=settings.DOCUMENT_CHAT_CONTEXT_CHARS)


def get_quiz_service(
    llm: LLMClient = Depends(get_llm_client),
    settings: Settings = Depends(get_settings_dep),
) -> QuizService:
    return QuizService(llm, use_fallback=settings.LLM_FALLBACK, source_chars=settings.QUIZ_SOURCE_CHARS)


def get_notes_service(
    llm: LLMClient = Depends(get_llm_client),
    settings: Settings = Depends(get_settings_dep),
) -> NotesService:
    return NotesService(llm, use_fallback=settings.LLM_FALLBACK, source_chars=settings.QUIZ_SOURCE_CHARS)


def get_roadmap_service(
    llm: LLMClient = Depends(get_llm_client),
    settings: Settings = Depends(get_settings_dep),
) -> RoadmapService:
    return RoadmapService(llm, use_fallback=settings.LLM_FALLBACK)
