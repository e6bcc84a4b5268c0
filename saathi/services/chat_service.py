import logging
import re
from typing import Set

from saathi.models.chat import ChatResponse, DocumentChatResponse
from saathi.services.llm import LLMClient, generate_or_fallback
from saathi.utils.text_utils import is_stop_word, normalize_text, split_sentences

logger = logging.getLogger(__name__)

NOT_FOUND_ANSWER = "I cannot find this information in the document"

_TERM_RE = re.compile(r"[a-z0-9]+")


def build_document_prompt(document_text: str, question: str) -> str:
    return (
        f"Context: {document_text}\n\n"
        f"Question: {question}\n\n"
        "Instructions: \n"
        "1. Answer based only on the provided context\n"
        f"2. If the information isn't in the context, say \"{NOT_FOUND_ANSWER}\"\n"
        "3. Keep responses concise and relevant\n\n"
        "Answer:"
    )


def _terms(text: str) -> Set[str]:
    return {t for t in _TERM_RE.findall(text.lower()) if len(t) > 2 and not is_stop_word(t)}


def extractive_answer(document_text: str, question: str, limit: int = 2) -> str:
    """
    Réponse locale : les phrases du document partageant le plus de termes avec la question.
    """
    wanted = _terms(question)
    scored = []
    for index, sentence in enumerate(split_sentences(document_text)):
        overlap = len(wanted & _terms(sentence))
        if overlap:
            scored.append((overlap, index, normalize_text(sentence)))

    if not scored:
        return NOT_FOUND_ANSWER + "."

    best = sorted(scored, key=lambda s: -s[0])[:limit]
    return " ".join(s + "." for _, _, s in sorted(best, key=lambda s: s[1]))


def local_reply(prompt: str) -> str:
    # Réponse "rule-based" ultra simple (mode développement)
    text = prompt.strip()
    if len(text) < 8:
        return "Could you give me a bit more detail about your question?"
    return (
        "Here is a quick answer from my local rules (development mode). "
        "Once the AI API is configured I will give you a more detailed answer.\n\n"
        f"Your question: \"{text}\""
    )


class ChatService:
    """
    Assistant général + chat sur un document analysé.
    - LLM configuré : un appel par message.
    - Sinon : réponses locales (écho pour le chat, extraction de phrases pour le document).
    """

    def __init__(self, llm: LLMClient, use_fallback: bool = True, context_chars: int = 15000):
        self.llm = llm
        self.use_fallback = use_fallback
        self.context_chars = context_chars

    def reply(self, prompt: str) -> ChatResponse:
        text = generate_or_fallback(
            self.llm,
            prompt,
            lambda: local_reply(prompt),
            use_fallback=self.use_fallback,
            error_detail="Failed to generate content",
        )
        return ChatResponse(message=text)

    def ask_document(self, question: str, document_text: str) -> DocumentChatResponse:
        context = document_text[: self.context_chars]
        logger.debug("document chat: question=%d chars, context=%d chars", len(question), len(context))

        text = generate_or_fallback(
            self.llm,
            build_document_prompt(context, question),
            lambda: extractive_answer(context, question),
            use_fallback=self.use_fallback,
            error_detail="Failed to get response",
        )
        return DocumentChatResponse(response=text)
