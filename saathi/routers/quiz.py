from typing import Optional

import httpx
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from starlette.status import HTTP_400_BAD_REQUEST, HTTP_500_INTERNAL_SERVER_ERROR

from saathi.core.config import Settings
from saathi.core.deps import get_http_client, get_quiz_service, get_settings_dep
from saathi.models.extract import ExtractTextResponse
from saathi.models.quiz import (
    DEFAULT_QUESTIONS,
    GradeRequest, GradeResponse,
    QuizResponse,
    QuizTextRequest, QuizTopicRequest, QuizUrlRequest,
)
from saathi.services.quiz_service import QuizService, grade_quiz
from saathi.utils.pdf_extract import PdfExtractionError, extract_pdf
from saathi.utils.uploads import read_upload
from saathi.utils.web_extract import extract_url_text

router = APIRouter(prefix="/v1/quiz", tags=["quiz"])


def _pdf_text(file: Optional[UploadFile], settings: Settings) -> str:
    if file is None:
        raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail="No PDF file provided")

    data = read_upload(file, settings.MAX_UPLOAD_MB)
    try:
        text = extract_pdf(data).joined("\n")
    except PdfExtractionError:
        raise HTTPException(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to process PDF file. Please ensure the file is valid.",
        )
    if not text.strip():
        raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail="No readable text found in PDF")
    return text


@router.post("/generate", response_model=QuizResponse)
def generate_quiz(body: QuizTextRequest, service: QuizService = Depends(get_quiz_service)):
    return service.generate(body.text, body.numQuestions)


@router.post("/topic", response_model=QuizResponse)
def generate_quiz_from_topic(body: QuizTopicRequest, service: QuizService = Depends(get_quiz_service)):
    return service.generate(body.topic, body.numQuestions)


@router.post("/pdf", response_model=ExtractTextResponse)
def quiz_pdf_text(
    file: Optional[UploadFile] = File(None),
    settings: Settings = Depends(get_settings_dep),
):
    return ExtractTextResponse(text=_pdf_text(file, settings))


@router.post("/pdf/generate", response_model=QuizResponse)
def generate_quiz_from_pdf(
    file: Optional[UploadFile] = File(None),
    numQuestions: int = Form(DEFAULT_QUESTIONS),
    settings: Settings = Depends(get_settings_dep),
    service: QuizService = Depends(get_quiz_service),
):
    return service.generate(_pdf_text(file, settings), numQuestions)


@router.post("/url", response_model=QuizResponse)
def generate_quiz_from_url(
    body: QuizUrlRequest,
    client: httpx.Client = Depends(get_http_client),
    service: QuizService = Depends(get_quiz_service),
):
    return service.generate(extract_url_text(client, body.url), body.numQuestions)


@router.post("/grade", response_model=GradeResponse)
def grade(body: GradeRequest):
    return grade_quiz(body.questions, body.answers)
