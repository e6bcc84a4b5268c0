import re
import unicodedata
from typing import List

_PUNCT_RE = re.compile(r"[.,;:!?]")
_HTTP_URL_RE = re.compile(r"^https?://.+")

STOP_WORDS = frozenset(
    {
        "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with", "by",
        "this", "that", "these", "those", "is", "are", "was", "were", "be", "been", "being",
        "have", "has", "had", "do", "does", "did", "will", "would", "could", "should",
        "i", "you", "he", "she", "it", "we", "they", "me", "him", "her", "us", "them",
        "my", "your", "his", "its", "our", "their", "from", "up", "about", "into",
        "through", "during", "before", "after", "above", "below", "between", "among",
        "since", "until", "while", "although", "though", "because", "if", "when", "where",
        "how", "what", "which", "who", "whom", "whose", "why", "can", "may", "might",
        "must", "shall", "very", "too", "so", "just", "now", "then", "here", "there",
    }
)


def normalize_text(text: str) -> str:
    """
    Nettoie une chaîne : trim, unicodes normalisés, espaces réduits.
    """
    if not text:
        return ""
    text = text.strip()
    text = unicodedata.normalize("NFKC", text)
    text = re.sub(r"\s+", " ", text)
    return text


def is_stop_word(word: str) -> bool:
    return word.lower() in STOP_WORDS


def is_http_url(url: str) -> bool:
    return bool(url and _HTTP_URL_RE.match(url))


def split_sentences(text: str) -> List[str]:
    """
    Découpe sur . ! ? (phrases non vides, non trimées).
    """
    return [s for s in re.split(r"[.!?]+", text) if s.strip()]


def reconstruct_words(text: str) -> str:
    """
    Recolle les mots d'un texte extrait caractère par caractère ("H e l l o" -> "Hello").
    Une majuscule isolée ou une ponctuation ferme le mot en cours.
    """
    tokens = text.split()
    if not tokens:
        return text

    out: List[str] = []
    current = ""

    for i, token in enumerate(tokens):
        if len(token) == 1 and token.isascii() and token.isalnum():
            current += token
        else:
            if current:
                out.append(current)
                current = ""
            out.append(token)

        nxt = tokens[i + 1] if i + 1 < len(tokens) else None
        if current and nxt:
            if _PUNCT_RE.search(nxt) or (len(nxt) == 1 and "A" <= nxt <= "Z"):
                out.append(current)
                current = ""

    if current:
        out.append(current)

    result = []
    for i, part in enumerate(out):
        result.append(part)
        nxt = out[i + 1] if i + 1 < len(out) else None
        if nxt and not _PUNCT_RE.search(nxt):
            result.append(" ")
    return "".join(result)


def clean_extracted_text(text: str) -> str:
    """
    Nettoyage post-extraction PDF : espaces, sauts de ligne, ponctuation.
    """
    text = re.sub(r"[ \t]+", " ", text)
    text = re.sub(r"\n{3,}", "\n\n", text)
    text = re.sub(r"\s+([.,;:!?])", r"\1", text)
    text = re.sub(r"([.,;:!?])([a-zA-Z])", r"\1 \2", text)
    text = "\n".join(line.strip() for line in text.split("\n")).strip()

    if text:
        words = text.split()
        avg = sum(len(w) for w in words) / len(words)
        # texte "H e l l o" : mots de longueur ~1
        if avg < 2 and len(words) > 10:
            text = reconstruct_words(text)
    return text


def collapse_whitespace(text: str) -> str:
    text = re.sub(r"\n\s*\n", "\n", text)
    return re.sub(r"\s+", " ", text).strip()
