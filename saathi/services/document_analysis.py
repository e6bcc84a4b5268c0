"""
Analyse heuristique d'un texte : statistiques, mots-clés, sentiment,
complexité, points clés et résumé extractif.

Tout est calculé en une passe, sans état ni appel externe. Un texte vide
ne lève jamais d'erreur : les ratios sur des compteurs nuls valent 0.
"""
import math
import re
from collections import Counter
from datetime import date
from typing import Dict, List, Optional

from saathi.models.documents import BasicStats, ContentAnalysis, DocumentAnalysis
from saathi.utils.text_utils import is_stop_word, split_sentences

WORDS_PER_MINUTE = 200
TOP_KEYWORDS = 8
SUMMARY_SENTENCES = 3
PREVIEW_CHARS = 500

POSITIVE_WORDS = (
    "good", "great", "excellent", "amazing", "wonderful", "fantastic", "positive",
    "successful", "achievement", "growth", "improvement", "benefit", "advantage",
    "opportunity", "solution", "effective", "efficient", "valuable", "important",
    "significant",
)
NEGATIVE_WORDS = (
    "bad", "terrible", "awful", "horrible", "negative", "problem", "issue", "challenge",
    "difficulty", "failure", "decline", "decrease", "loss", "risk", "threat", "concern",
    "weakness", "limitation", "obstacle", "barrier",
)

_NON_WORD = re.compile(r"[^A-Za-z0-9_]")


def _ratio(num: float, den: float) -> float:
    return num / den if den else 0.0


def reading_minutes(word_count: int) -> int:
    return math.ceil(word_count / WORDS_PER_MINUTE)


def top_keywords(words: List[str], limit: int = TOP_KEYWORDS) -> List[str]:
    """
    Mots les plus fréquents (minuscules, ponctuation retirée, > 3 lettres, hors mots vides).
    À fréquence égale, l'ordre d'apparition est conservé.
    """
    cleaned = (_NON_WORD.sub("", w.lower()) for w in words)
    freq = Counter(w for w in cleaned if len(w) > 3 and not is_stop_word(w))
    return [w for w, _ in freq.most_common(limit)]


def analyze_sentiment(text: str) -> str:
    """
    Compte les mots du lexique présents (en sous-chaîne) ; il faut 1.5x plus de
    termes d'un côté pour sortir de "Neutral".
    """
    lower = text.lower()
    positive = sum(1 for w in POSITIVE_WORDS if w in lower)
    negative = sum(1 for w in NEGATIVE_WORDS if w in lower)

    if positive > negative * 1.5:
        return "Positive"
    if negative > positive * 1.5:
        return "Negative"
    return "Neutral"


def analyze_complexity(words: List[str], sentences: List[str]) -> str:
    avg_words_per_sentence = _ratio(len(words), len(sentences))
    long_ratio = _ratio(sum(1 for w in words if len(w) > 6), len(words))

    if avg_words_per_sentence > 20 or long_ratio > 0.3:
        return "High"
    if avg_words_per_sentence > 15 or long_ratio > 0.2:
        return "Medium"
    return "Low"


def generate_key_insights(words: List[str], stats: BasicStats) -> List[str]:
    insights: List[str] = []

    if stats.wordCount > 5000:
        insights.append("This is a comprehensive document with substantial content")
    elif stats.wordCount > 1000:
        insights.append("This document contains moderate-length content")
    else:
        insights.append("This is a concise document with focused content")

    minutes = reading_minutes(stats.wordCount)
    if minutes > 30:
        insights.append("Estimated reading time suggests this is an in-depth material")
    elif minutes > 10:
        insights.append("This document requires moderate time investment to read thoroughly")
    else:
        insights.append("This is a quick read that can be consumed in a short time")

    per_paragraph = _ratio(stats.wordCount, stats.paragraphCount)
    if per_paragraph > 100:
        insights.append("Document contains detailed paragraphs with comprehensive explanations")
    elif per_paragraph > 50:
        insights.append("Well-structured content with balanced paragraph lengths")
    else:
        insights.append("Content is organized in concise, digestible sections")

    diversity = _ratio(len({w.lower() for w in words}), len(words))
    if diversity > 0.6:
        insights.append("Document demonstrates rich vocabulary and varied language use")
    elif diversity > 0.4:
        insights.append("Moderate vocabulary diversity with some repetition of key terms")
    else:
        insights.append("Content uses focused terminology with consistent key concepts")

    return insights[:4]


def generate_summary(text: str, sentences: List[str], limit: int = SUMMARY_SENTENCES) -> str:
    """
    Résumé extractif.

    Chaque phrase reçoit la fréquence moyenne (dans tout le texte) de ses mots,
    multipliée par 1.2 pour les trois premières et les deux dernières phrases.
    Les `limit` meilleures sont remises dans l'ordre du texte.
    """
    freq: Dict[str, int] = Counter(text.lower().split())
    n = len(sentences)

    scored = []
    for index, sentence in enumerate(sentences):
        sentence_words = sentence.lower().split()
        score = _ratio(sum(freq.get(w, 0) for w in sentence_words), len(sentence_words))
        position = 1.2 if index < 3 or index > n - 3 else 1.0
        scored.append((score * position, index, sentence.strip()))

    # tri stable : à score égal, la phrase la plus tôt gagne
    best = sorted(scored, key=lambda s: -s[0])[:limit]
    return " ".join(s for _, _, s in sorted(best, key=lambda s: s[1]))


def analyze_content(text: str, words: List[str], sentences: List[str]) -> ContentAnalysis:
    return ContentAnalysis(
        topKeywords=top_keywords(words),
        averageWordLength=_ratio(sum(len(w) for w in words), len(words)),
        readingTime=f"{reading_minutes(len(words))} minute(s)",
        languageDetected="English",
        sentiment=analyze_sentiment(text),
        complexity=analyze_complexity(words, sentences),
    )


def analyze_text(text: str, page_count: Optional[int] = None) -> DocumentAnalysis:
    words = text.split()
    sentences = split_sentences(text)
    lines = [line for line in text.split("\n") if line.strip()]
    paragraphs = [p for p in re.split(r"\n\s*\n", text) if p.strip()]

    stats = BasicStats(
        wordCount=len(words),
        charCount=len(text),
        lineCount=len(lines),
        paragraphCount=len(paragraphs),
        pageCount=page_count or None,
    )

    preview = text[:PREVIEW_CHARS] + ("..." if len(text) > PREVIEW_CHARS else "")

    return DocumentAnalysis(
        basicStats=stats,
        contentAnalysis=analyze_content(text, words, sentences),
        keyInsights=generate_key_insights(words, stats),
        summary=generate_summary(text, sentences),
        preview=preview,
    )


def render_report(analysis: DocumentAnalysis, file_name: str, day: Optional[date] = None) -> str:
    """
    Rapport texte téléchargeable (<nom>_analysis.txt).
    """
    day = day or date.today()
    stats = analysis.basicStats
    content = analysis.contentAnalysis

    lines = [
        "DOCUMENT ANALYSIS REPORT",
        "========================",
        "",
        f"File: {file_name}",
        f"Analysis Date: {day.isoformat()}",
        "",
        "BASIC STATISTICS",
        "----------------",
        f"Words: {stats.wordCount}",
        f"Characters: {stats.charCount}",
        f"Lines: {stats.lineCount}",
        f"Paragraphs: {stats.paragraphCount}",
    ]
    if stats.pageCount:
        lines.append(f"Pages: {stats.pageCount}")
    lines += [
        "",
        "CONTENT ANALYSIS",
        "----------------",
        f"Reading Time: {content.readingTime}",
        f"Average Word Length: {content.averageWordLength:.1f} characters",
        f"Language: {content.languageDetected}",
        f"Sentiment: {content.sentiment}",
        f"Complexity: {content.complexity}",
        "",
        "TOP KEYWORDS",
        "------------",
        ", ".join(content.topKeywords),
        "",
        "KEY INSIGHTS",
        "------------",
        *[f"• {insight}" for insight in analysis.keyInsights],
        "",
        "SUMMARY",
        "-------",
        analysis.summary,
        "",
        "CONTENT PREVIEW",
        "---------------",
        analysis.preview,
    ]
    return "\n".join(lines) + "\n"
