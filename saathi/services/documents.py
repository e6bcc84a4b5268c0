import logging
from typing import Optional, Tuple

from fastapi import HTTPException
from starlette.status import HTTP_400_BAD_REQUEST, HTTP_500_INTERNAL_SERVER_ERROR

from saathi.models.documents import DocumentAnalysis
from saathi.services.document_analysis import analyze_text
from saathi.utils.office_extract import OfficeExtractionError, extract_docx, extract_pptx
from saathi.utils.pdf_extract import PdfExtractionError, extract_pdf
from saathi.utils.text_utils import clean_extracted_text

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".pdf", ".docx", ".txt", ".pptx")
MIN_TEXT_CHARS = 10


def _bad_request(detail: str) -> HTTPException:
    return HTTPException(status_code=HTTP_400_BAD_REQUEST, detail=detail)


def extract_document(filename: str, data: bytes) -> Tuple[str, Optional[int]]:
    """
    Texte brut (+ nombre de pages pour un PDF) selon l'extension du fichier.
    """
    name = (filename or "").lower()
    if not name.endswith(SUPPORTED_EXTENSIONS):
        raise _bad_request("Unsupported file type.")

    if name.endswith(".pdf"):
        try:
            pdf = extract_pdf(data)
        except PdfExtractionError:
            raise _bad_request("Could not parse PDF file. Please try a different PDF.")
        return clean_extracted_text(pdf.joined("\n\n")), pdf.page_count

    if name.endswith(".docx"):
        try:
            return extract_docx(data), None
        except OfficeExtractionError as e:
            logger.warning("DOCX parsing error: %s", e)
            raise _bad_request("Could not parse DOCX file.")

    if name.endswith(".txt"):
        return data.decode("utf-8", errors="replace"), None

    # .pptx
    try:
        text = extract_pptx(data)
    except OfficeExtractionError as e:
        logger.warning("PPTX parsing error: %s", e)
        raise _bad_request("Could not parse PPTX file.")
    if not text:
        raise _bad_request("No text content found in PPTX file.")
    return text, None


def analyze_document(filename: str, data: bytes) -> Tuple[DocumentAnalysis, str]:
    text, page_count = extract_document(filename, data)

    if not text or len(text.strip()) < MIN_TEXT_CHARS:
        raise _bad_request("No meaningful text content found in the document.")

    try:
        analysis = analyze_text(text, page_count=page_count)
    except Exception:
        logger.exception("Document analysis error (%s)", filename)
        raise HTTPException(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to analyze document content",
        )
    return analysis, text
