import logging
import re
from typing import Dict, List, Optional

from fastapi import HTTPException
from starlette.status import HTTP_400_BAD_REQUEST, HTTP_502_BAD_GATEWAY

from saathi.models.quiz import GradeResponse, QuizQuestion, QuizResponse, QuizResultItem
from saathi.services.document_analysis import top_keywords
from saathi.services.llm import LLMClient, generate_or_fallback
from saathi.utils.text_utils import is_stop_word, split_sentences

logger = logging.getLogger(__name__)

MIN_QUESTIONS = 1
MAX_QUESTIONS = 50
LETTERS = "ABCD"

_QUESTION_RE = re.compile(r"^\**\s*Question\b")
_OPTION_RE = re.compile(r"^[A-D]\.")
_ANSWER_RE = re.compile(r"^\*\*Answer:\*\*\s*(.*)$")
_WORD_RE = re.compile(r"[A-Za-z][A-Za-z\-']+")
_NON_WORD = re.compile(r"[^a-z0-9_]")

_FILLERS = [
    "None of the above",
    "All of the above",
    "Not mentioned in the text",
    "Cannot be determined",
]

_TOPIC_TEMPLATES = [
    ("Which of the following best describes {t}?", "A core subject worth studying step by step"),
    ("What is the best first step to learn {t}?", "Understand its fundamental concepts"),
    ("Why is practice important when studying {t}?", "It turns theory into lasting skills"),
    ("How can you check your understanding of {t}?", "By explaining it and solving problems"),
    ("What should you do after learning the basics of {t}?", "Apply them to real examples"),
]


def normalize_num_questions(n: Optional[int]) -> int:
    if n is None:
        return 5
    return max(MIN_QUESTIONS, min(MAX_QUESTIONS, n))


def build_quiz_prompt(text: str, num_questions: int) -> str:
    return (
        f"Generate {num_questions} quiz questions based on the following content:\n"
        f"{text}\n\n"
        "Provide questions with four answer options (A, B, C, D). Also, include the correct answer.\n"
        "Format each question as follows:\n"
        "Question 1: [Your question here]\n"
        "A. [Option A]\n"
        "B. [Option B]\n"
        "C. [Option C]\n"
        "D. [Option D]\n"
        "**Answer:** [Correct Option]"
    )


def parse_questions(raw: str) -> List[QuizQuestion]:
    """
    Relit le format texte "Question k: / A. .. D. / **Answer:**" ligne par ligne.
    Seules les questions complètes (4 options + réponse) sont gardées.
    """
    questions: List[QuizQuestion] = []
    current: Dict = {}

    def flush():
        if current.get("question") and len(current.get("options", [])) == 4 and current.get("answer"):
            questions.append(QuizQuestion(**current))

    for line in raw.split("\n"):
        line = line.strip()
        if _QUESTION_RE.match(line):
            flush()
            current = {"question": line.replace("**", "").strip(), "options": []}
        elif _OPTION_RE.match(line) and current:
            current["options"].append(line)
        else:
            m = _ANSWER_RE.match(line)
            if m and current:
                current["answer"] = m.group(1).strip()

    flush()
    return questions


def extract_answer_letter(answer: str) -> str:
    if not answer:
        return ""
    m = re.match(r"^([A-D])", answer)
    return m.group(1) if m else answer


def grade_quiz(questions: List[QuizQuestion], answers: Dict[int, str]) -> GradeResponse:
    if any(i not in answers for i in range(len(questions))):
        raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail="Please answer all questions")

    results: List[QuizResultItem] = []
    for i, q in enumerate(questions):
        user_answer = answers[i]
        results.append(
            QuizResultItem(
                question=q.question,
                isCorrect=extract_answer_letter(user_answer) == extract_answer_letter(q.answer),
                userAnswer=user_answer,
                correctAnswer=q.answer,
            )
        )
    return GradeResponse(
        score=sum(1 for r in results if r.isCorrect),
        total=len(results),
        results=results,
    )


# ---------- générateur local (sans LLM) ----------

def _format_question(k: int, stem: str, correct: str, distractors: List[str]) -> str:
    pos = (k - 1) % 4
    options = distractors[:3]
    options.insert(pos, correct)
    lines = [f"Question {k}: {stem}"]
    lines += [f"{LETTERS[i]}. {opt}" for i, opt in enumerate(options)]
    lines.append(f"**Answer:** {LETTERS[pos]}")
    return "\n".join(lines)


def _blank_candidate(sentence: str) -> Optional[str]:
    # "researchers'" -> "researchers"
    words = [w.strip("'-") for w in _WORD_RE.findall(sentence)]
    words = [w for w in words if len(w) > 3 and not is_stop_word(w)]
    if not words:
        return None
    return max(words, key=len)


def fallback_quiz(text: str, num_questions: int) -> str:
    """
    Questions "texte à trous" : une phrase de la source, son mot le plus long masqué.
    Les distracteurs viennent des autres mots-clés du texte.
    Sans phrase exploitable (simple sujet), questions génériques sur le sujet.
    """
    blocks: List[str] = []
    keywords = top_keywords(text.split(), limit=20)

    for sentence in split_sentences(text):
        if len(blocks) >= num_questions:
            break
        sentence = " ".join(sentence.split())
        answer = _blank_candidate(sentence)
        if len(sentence) <= 8 or not answer or len(sentence.split()) < 4:
            continue

        stem = "Fill in the blank: " + re.sub(r"(?<!\w)" + re.escape(answer) + r"(?!\w)", "_____", sentence, count=1)
        key = _NON_WORD.sub("", answer.lower())
        pool = [k for k in keywords if k != key]
        distractors = (pool + _FILLERS)[:3]
        blocks.append(_format_question(len(blocks) + 1, stem, answer, distractors))

    topic = " ".join(text.split())
    if not topic or len(topic) > 60:
        topic = keywords[0] if keywords else "this topic"
    while len(blocks) < num_questions:
        stem, correct = _TOPIC_TEMPLATES[len(blocks) % len(_TOPIC_TEMPLATES)]
        blocks.append(_format_question(len(blocks) + 1, stem.format(t=topic), correct, list(_FILLERS)))

    return "\n\n".join(blocks)


class QuizService:
    def __init__(self, llm: LLMClient, use_fallback: bool = True, source_chars: int = 20000):
        self.llm = llm
        self.use_fallback = use_fallback
        self.source_chars = source_chars

    def generate(self, text: str, num_questions: Optional[int]) -> QuizResponse:
        if not text or not text.strip():
            raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail="No content provided")

        n = normalize_num_questions(num_questions)
        source = text.strip()[: self.source_chars]

        raw = generate_or_fallback(
            self.llm,
            build_quiz_prompt(source, n),
            lambda: fallback_quiz(source, n),
            use_fallback=self.use_fallback,
            error_detail="Failed to generate quiz",
        )

        questions = parse_questions(raw)
        if not questions:
            logger.warning("Aucune question exploitable dans la réponse (%d caractères)", len(raw))
            raise HTTPException(
                status_code=HTTP_502_BAD_GATEWAY,
                detail="Failed to generate valid questions. Please try again with different content.",
            )
        return QuizResponse(questions=questions, raw=raw)
