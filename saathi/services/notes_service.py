from fastapi import HTTPException
from starlette.status import HTTP_400_BAD_REQUEST

from saathi.models.notes import NotesResponse, NotesSource
from saathi.services.document_analysis import generate_summary, top_keywords
from saathi.services.llm import LLMClient, generate_or_fallback
from saathi.utils.text_utils import split_sentences

NOTES_SYSTEM = "You are a helpful study assistant that writes clear, well-organized notes for students."


def build_text_notes_prompt(text: str) -> str:
    return (
        "Create well-structured study notes in Markdown from the following content. "
        "Start with the title '# Generated Notes', then a '## Key Points' section with bullet points, "
        "a '## Summary' section and an '## Additional Resources' section.\n\n"
        f"Content:\n{text}"
    )


def build_topic_notes_prompt(topic: str) -> str:
    return (
        f"Create comprehensive study notes in Markdown on the topic: {topic}. "
        f"Use '# Notes on {topic}' as the title with the sections '## Overview', '## Key Concepts', "
        "'## Detailed Analysis' and '## Conclusion'. Use bullet points where helpful."
    )


def fallback_text_notes(text: str) -> str:
    keywords = top_keywords(text.split(), limit=6)
    summary = generate_summary(text, split_sentences(text)) or text.strip()[:300]

    points = [f"• {k.capitalize()}" for k in keywords] or ["• Main concept explanation with detailed breakdown"]
    return "\n".join(
        [
            "# Generated Notes",
            "",
            "## Key Points",
            *points,
            "",
            "## Summary",
            summary,
            "",
            "## Additional Resources",
            "• Recommended further reading",
            "• Related topics for exploration",
            "• Practice exercises or applications",
        ]
    )


def fallback_topic_notes(topic: str) -> str:
    return f"""# Notes on {topic}

## Overview
Comprehensive introduction to {topic} with foundational concepts and principles.

## Key Concepts
• Primary definitions and terminology
• Core principles and theories
• Historical context and development
• Current applications and relevance

## Detailed Analysis
In-depth examination of the subject matter, including:
• Technical specifications or methodologies
• Case studies and real-world examples
• Best practices and recommendations
• Common challenges and solutions

## Conclusion
Summary of essential points and practical applications for {topic}."""


class NotesService:
    def __init__(self, llm: LLMClient, use_fallback: bool = True, source_chars: int = 20000):
        self.llm = llm
        self.use_fallback = use_fallback
        self.source_chars = source_chars

    def from_topic(self, topic: str) -> NotesResponse:
        topic = topic.strip()
        if not topic:
            raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail="Please provide valid input")

        notes = generate_or_fallback(
            self.llm,
            build_topic_notes_prompt(topic),
            lambda: fallback_topic_notes(topic),
            use_fallback=self.use_fallback,
            error_detail="An error occurred while generating notes",
            system=NOTES_SYSTEM,
        )
        return NotesResponse(notes=notes, source=NotesSource.topic)

    def from_text(self, text: str, source: NotesSource = NotesSource.text) -> NotesResponse:
        if not text or not text.strip():
            raise HTTPException(
                status_code=HTTP_400_BAD_REQUEST,
                detail="No content found to generate notes from",
            )

        content = text.strip()[: self.source_chars]
        notes = generate_or_fallback(
            self.llm,
            build_text_notes_prompt(content),
            lambda: fallback_text_notes(content),
            use_fallback=self.use_fallback,
            error_detail="An error occurred while generating notes",
            system=NOTES_SYSTEM,
        )
        return NotesResponse(notes=notes, source=source)
