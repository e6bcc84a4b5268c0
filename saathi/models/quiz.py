from typing import Dict, List
from pydantic import BaseModel, Field

DEFAULT_QUESTIONS = 5


class QuizQuestion(BaseModel):
    question: str = Field(..., description="Énoncé, ex: 'Question 1: ...'")
    options: List[str] = Field(..., min_length=4, max_length=4, description="'A. ...' à 'D. ...'")
    answer: str = Field(..., description="Bonne réponse, ex: 'B' ou 'B. ...'")


class QuizTextRequest(BaseModel):
    text: str = Field(default="", description="Contenu source")
    numQuestions: int = Field(default=DEFAULT_QUESTIONS, description="Ramené entre 1 et 50")


class QuizTopicRequest(BaseModel):
    topic: str = Field(..., min_length=1)
    numQuestions: int = Field(default=DEFAULT_QUESTIONS)


class QuizUrlRequest(BaseModel):
    url: str
    numQuestions: int = Field(default=DEFAULT_QUESTIONS)


class QuizResponse(BaseModel):
    questions: List[QuizQuestion]
    raw: str = Field(..., description="Texte brut renvoyé par le générateur")


class GradeRequest(BaseModel):
    questions: List[QuizQuestion] = Field(..., min_length=1)
    answers: Dict[int, str] = Field(
        default_factory=dict,
        description="Index de question -> réponse choisie (ex: 'A. ...')",
    )


class QuizResultItem(BaseModel):
    question: str
    isCorrect: bool
    userAnswer: str
    correctAnswer: str


class GradeResponse(BaseModel):
    score: int
    total: int
    results: List[QuizResultItem]
