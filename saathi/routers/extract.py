from typing import Optional

import httpx
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from starlette.status import HTTP_400_BAD_REQUEST, HTTP_500_INTERNAL_SERVER_ERROR

from saathi.core.config import Settings
from saathi.core.deps import get_http_client, get_settings_dep
from saathi.models.extract import ExtractTextResponse, UrlRequest
from saathi.utils.pdf_extract import PdfExtractionError, extract_pdf
from saathi.utils.uploads import read_upload
from saathi.utils.web_extract import extract_url_text

router = APIRouter(prefix="/v1/extract", tags=["extract"])


@router.post("/pdf", response_model=ExtractTextResponse)
def extract_pdf_text(
    file: Optional[UploadFile] = File(None),
    pages: Optional[str] = Form(None, description="Plage(s) de pages ex: '12-24,30'. Vide = tout le doc."),
    settings: Settings = Depends(get_settings_dep),
):
    if file is None:
        raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail="No PDF file provided")

    data = read_upload(file, settings.MAX_UPLOAD_MB)
    try:
        pdf = extract_pdf(data, pages=pages)
    except PdfExtractionError:
        raise HTTPException(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to extract text from PDF",
        )
    return ExtractTextResponse(text=pdf.joined("\n"), pageCount=pdf.page_count)


@router.post("/url", response_model=ExtractTextResponse)
def extract_url(body: UrlRequest, client: httpx.Client = Depends(get_http_client)):
    return ExtractTextResponse(text=extract_url_text(client, body.url))
