import logging
from typing import Callable, Optional

from fastapi import HTTPException
from starlette.status import HTTP_502_BAD_GATEWAY, HTTP_503_SERVICE_UNAVAILABLE

logger = logging.getLogger(__name__)


class LLMNotConfigured(RuntimeError):
    pass


class LLMError(RuntimeError):
    pass


class LLMClient:
    """
    Client LLM minimal (SDK openai, API chat.completions).
    - Si OPENAI_API_KEY est vide : `enabled` est False, les services basculent en local.
    - LLM_BASE_URL permet de viser une API compatible OpenAI (Gemini, Ollama...).
    """

    def __init__(
        self,
        api_key: str = "",
        model: str = "gpt-4o-mini",
        base_url: Optional[str] = None,
        temperature: float = 0.2,
        max_tokens: int = 2048,
    ):
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._client = None

        if api_key:
            from openai import OpenAI  # openai>=1.0

            self._client = OpenAI(api_key=api_key, base_url=base_url)

    @property
    def enabled(self) -> bool:
        return self._client is not None

    def complete(
        self,
        prompt: str,
        system: Optional[str] = None,
        max_tokens: Optional[int] = None,
    ) -> str:
        if self._client is None:
            raise LLMNotConfigured("LLM API key not configured")

        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})

        try:
            comp = self._client.chat.completions.create(
                model=self.model,
                messages=messages,
                max_tokens=max_tokens or self.max_tokens,
                temperature=self.temperature,
            )
        except Exception as e:
            raise LLMError(str(e)) from e

        text = (comp.choices[0].message.content or "").strip()
        if not text:
            raise LLMError("empty completion")
        return text


def generate_or_fallback(
    llm: LLMClient,
    prompt: str,
    fallback: Callable[[], str],
    *,
    use_fallback: bool,
    error_detail: str,
    system: Optional[str] = None,
) -> str:
    """
    Appel unique au LLM, sinon générateur local `fallback()` quand aucune clé n'est configurée.
    Erreur LLM -> 502, clé absente sans fallback -> 503.
    """
    if not llm.enabled:
        if use_fallback:
            logger.info("LLM non configuré, générateur local utilisé.")
            return fallback()
        raise HTTPException(
            status_code=HTTP_503_SERVICE_UNAVAILABLE,
            detail="LLM API key not configured",
        )

    try:
        return llm.complete(prompt, system=system)
    except LLMError as e:
        logger.warning("LLM error: %s", e)
        raise HTTPException(status_code=HTTP_502_BAD_GATEWAY, detail=error_detail)
