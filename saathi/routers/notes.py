from typing import Optional

import httpx
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from starlette.status import HTTP_400_BAD_REQUEST

from saathi.core.config import Settings
from saathi.core.deps import get_http_client, get_notes_service, get_settings_dep
from saathi.models.notes import NotesResponse, NotesSource, NotesTextRequest, NotesTopicRequest, NotesUrlRequest
from saathi.services.notes_service import NotesService
from saathi.utils.pdf_extract import PdfExtractionError, extract_pdf
from saathi.utils.text_utils import is_http_url
from saathi.utils.uploads import is_pdf_upload, read_upload
from saathi.utils.web_extract import extract_url_text

router = APIRouter(prefix="/v1/notes", tags=["notes"])


@router.post("/topic", response_model=NotesResponse)
def notes_from_topic(body: NotesTopicRequest, service: NotesService = Depends(get_notes_service)):
    return service.from_topic(body.topic)


@router.post("/text", response_model=NotesResponse)
def notes_from_text(body: NotesTextRequest, service: NotesService = Depends(get_notes_service)):
    return service.from_text(body.text)


@router.post("/url", response_model=NotesResponse)
def notes_from_url(
    body: NotesUrlRequest,
    client: httpx.Client = Depends(get_http_client),
    service: NotesService = Depends(get_notes_service),
):
    url = body.url.strip()
    if not is_http_url(url):
        raise HTTPException(
            status_code=HTTP_400_BAD_REQUEST,
            detail="Please enter a valid URL starting with http:// or https://",
        )
    return service.from_text(extract_url_text(client, url), source=NotesSource.url)


@router.post("/pdf", response_model=NotesResponse)
def notes_from_pdf(
    file: Optional[UploadFile] = File(None),
    settings: Settings = Depends(get_settings_dep),
    service: NotesService = Depends(get_notes_service),
):
    if file is None or not is_pdf_upload(file):
        raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail="Please select a valid PDF file")

    data = read_upload(file, settings.MAX_UPLOAD_MB)
    try:
        text = extract_pdf(data).joined("\n")
    except PdfExtractionError:
        raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail="Please select a valid PDF file")
    return service.from_text(text, source=NotesSource.pdf)
