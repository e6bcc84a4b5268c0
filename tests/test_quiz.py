import httpx
import pytest

from saathi.models.quiz import QuizQuestion
from saathi.services.quiz_service import (
    extract_answer_letter,
    fallback_quiz,
    normalize_num_questions,
    parse_questions,
)

from factories import SAMPLE_TEXT, make_pdf

LLM_QUIZ = """Here is your quiz:

**Question 1:** What do plants use to capture sunlight?
A. Glucose
B. Chlorophyll
C. Oxygen
D. Water
**Answer:** B

Question 2: Which gas is released?
A. Oxygen
B. Nitrogen
C. Helium
D. Carbon monoxide
**Answer:** A. Oxygen

Question 3: This one is incomplete
A. Yes
B. No
**Answer:** A
"""


def test_parse_questions_keeps_complete_blocks():
    questions = parse_questions(LLM_QUIZ)
    assert len(questions) == 2
    assert questions[0].question == "Question 1: What do plants use to capture sunlight?"
    assert questions[0].options == ["A. Glucose", "B. Chlorophyll", "C. Oxygen", "D. Water"]
    assert questions[0].answer == "B"
    assert questions[1].answer == "A. Oxygen"

def test_parse_questions_without_format():
    assert parse_questions("Sorry, I cannot help with that.") == []

@pytest.mark.parametrize("n,expected", [(None, 5), (0, 1), (-3, 1), (7, 7), (100, 50)])
def test_normalize_num_questions(n, expected):
    assert normalize_num_questions(n) == expected

def test_extract_answer_letter():
    assert extract_answer_letter("B. Chlorophyll") == "B"
    assert extract_answer_letter("C") == "C"
    assert extract_answer_letter("") == ""

def test_fallback_quiz_blanks_key_words():
    questions = parse_questions(fallback_quiz(SAMPLE_TEXT, 3))
    assert len(questions) == 3
    first = questions[0]
    assert first.question.startswith("Question 1: Fill in the blank:")
    assert "_____" in first.question
    assert first.answer == "A"
    assert first.options[0] == "A. Photosynthesis"
    # la bonne réponse change de position d'une question à l'autre
    assert [q.answer for q in questions] == ["A", "B", "C"]

def test_fallback_quiz_possessive_plural():
    text = "The experiment confirmed the researchers' hypothesis about gravity waves today."
    question = parse_questions(fallback_quiz(text, 1))[0]
    assert "_____' hypothesis" in question.question
    assert question.answer == "A"
    assert question.options[0] == "A. researchers"
    assert not any("researchers" in o for o in question.options[1:])

def test_fallback_quiz_for_a_topic():
    questions = parse_questions(fallback_quiz("Linear Algebra", 4))
    assert len(questions) == 4
    assert all("Linear Algebra" in q.question for q in questions)


def test_generate_from_text(test_client):
    r = test_client.post("/v1/quiz/generate", json={"text": SAMPLE_TEXT, "numQuestions": 2})
    assert r.status_code == 200, r.text
    data = r.json()
    assert len(data["questions"]) == 2
    for q in data["questions"]:
        assert len(q["options"]) == 4
        assert q["answer"] in "ABCD"
    assert data["raw"].startswith("Question 1:")

def test_generate_requires_content(test_client):
    r = test_client.post("/v1/quiz/generate", json={"text": "   "})
    assert r.status_code == 400
    assert r.json()["detail"] == "No content provided"

def test_generate_clamps_question_count(test_client):
    r = test_client.post("/v1/quiz/topic", json={"topic": "World History", "numQuestions": 500})
    assert r.status_code == 200
    assert len(r.json()["questions"]) == 50

    r = test_client.post("/v1/quiz/topic", json={"topic": "World History", "numQuestions": 0})
    assert r.status_code == 200
    assert len(r.json()["questions"]) == 1

def test_generate_with_llm(test_client, fake_llm):
    fake_llm.reply = LLM_QUIZ
    r = test_client.post("/v1/quiz/topic", json={"topic": "Photosynthesis", "numQuestions": 3})
    assert r.status_code == 200
    data = r.json()
    assert len(data["questions"]) == 2
    assert data["raw"] == LLM_QUIZ
    assert fake_llm.prompts[0].startswith("Generate 3 quiz questions based on the following content:\nPhotosynthesis")

def test_generate_with_unparseable_llm_output(test_client, fake_llm):
    fake_llm.reply = "I'd rather not."
    r = test_client.post("/v1/quiz/topic", json={"topic": "Photosynthesis"})
    assert r.status_code == 502
    assert r.json()["detail"].startswith("Failed to generate valid questions")

def test_generate_llm_failure(test_client, fake_llm):
    fake_llm.fail = True
    r = test_client.post("/v1/quiz/generate", json={"text": SAMPLE_TEXT})
    assert r.status_code == 502
    assert r.json()["detail"] == "Failed to generate quiz"


def test_pdf_text(test_client):
    pdf = make_pdf(["Photosynthesis converts light energy into chemical energy."])
    r = test_client.post("/v1/quiz/pdf", files={"file": ("bio.pdf", pdf, "application/pdf")})
    assert r.status_code == 200, r.text
    assert "Photosynthesis" in r.json()["text"]

def test_pdf_without_file(test_client):
    r = test_client.post("/v1/quiz/pdf")
    assert r.status_code == 400
    assert r.json()["detail"] == "No PDF file provided"

def test_pdf_without_text(test_client):
    r = test_client.post("/v1/quiz/pdf", files={"file": ("blank.pdf", make_pdf([""]), "application/pdf")})
    assert r.status_code == 400
    assert r.json()["detail"] == "No readable text found in PDF"

def test_pdf_invalid(test_client):
    r = test_client.post("/v1/quiz/pdf", files={"file": ("bad.pdf", b"not a pdf at all", "application/pdf")})
    assert r.status_code == 500
    assert r.json()["detail"] == "Failed to process PDF file. Please ensure the file is valid."

def test_pdf_generate(test_client):
    pdf = make_pdf([SAMPLE_TEXT[:90]])
    r = test_client.post(
        "/v1/quiz/pdf/generate",
        files={"file": ("bio.pdf", pdf, "application/pdf")},
        data={"numQuestions": "2"},
    )
    assert r.status_code == 200, r.text
    assert len(r.json()["questions"]) == 2

def test_pdf_too_large(test_client):
    big = b"%PDF-1.4\n" + b"0" * (2 * 1024 * 1024 + 1)
    r = test_client.post("/v1/quiz/pdf", files={"file": ("big.pdf", big, "application/pdf")})
    assert r.status_code == 413


def test_generate_from_url(test_client, mock_web):
    html = "<html><body><nav>Menu</nav><p>" + SAMPLE_TEXT + "</p></body></html>"
    mock_web(lambda request: httpx.Response(200, text=html))

    r = test_client.post("/v1/quiz/url", json={"url": "https://example.org/biology", "numQuestions": 2})
    assert r.status_code == 200, r.text
    assert len(r.json()["questions"]) == 2

def test_generate_from_invalid_url(test_client):
    r = test_client.post("/v1/quiz/url", json={"url": "example.org"})
    assert r.status_code == 400
    assert r.json()["detail"] == "Invalid URL format"


def _question(answer):
    return QuizQuestion(
        question="Question 1: Which gas is released?",
        options=["A. Oxygen", "B. Nitrogen", "C. Helium", "D. Argon"],
        answer=answer,
    ).model_dump()

def test_grade(test_client):
    body = {
        "questions": [_question("A"), _question("B. Nitrogen")],
        "answers": {"0": "A. Oxygen", "1": "C. Helium"},
    }
    r = test_client.post("/v1/quiz/grade", json=body)
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["score"] == 1
    assert data["total"] == 2
    assert data["results"][0]["isCorrect"] is True
    assert data["results"][1]["isCorrect"] is False
    assert data["results"][1]["correctAnswer"] == "B. Nitrogen"

def test_grade_requires_all_answers(test_client):
    body = {"questions": [_question("A"), _question("B")], "answers": {"0": "A. Oxygen"}}
    r = test_client.post("/v1/quiz/grade", json=body)
    assert r.status_code == 400
    assert r.json()["detail"] == "Please answer all questions"
