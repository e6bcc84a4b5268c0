import os
from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.responses import PlainTextResponse
from starlette.status import HTTP_400_BAD_REQUEST

from saathi.core.config import Settings
from saathi.core.deps import get_settings_dep
from saathi.models.documents import AnalyzeResponse
from saathi.services.document_analysis import render_report
from saathi.services.documents import analyze_document
from saathi.utils.uploads import read_upload

router = APIRouter(prefix="/v1/documents", tags=["documents"])


def _require_file(file: Optional[UploadFile]) -> UploadFile:
    if file is None or not file.filename:
        raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail="No file uploaded")
    return file


@router.post("/analyze", response_model=AnalyzeResponse)
def analyze(
    file: Optional[UploadFile] = File(None),
    settings: Settings = Depends(get_settings_dep),
):
    file = _require_file(file)
    data = read_upload(file, settings.MAX_UPLOAD_MB)
    analysis, text = analyze_document(file.filename, data)
    return AnalyzeResponse(analysis=analysis, text=text)


@router.post("/report", response_class=PlainTextResponse)
def report(
    file: Optional[UploadFile] = File(None),
    settings: Settings = Depends(get_settings_dep),
):
    """
    Même analyse que /analyze, rendue en rapport texte à télécharger.
    """
    file = _require_file(file)
    data = read_upload(file, settings.MAX_UPLOAD_MB)
    analysis, _ = analyze_document(file.filename, data)

    stem = os.path.splitext(os.path.basename(file.filename))[0] or "document"
    return PlainTextResponse(
        render_report(analysis, file.filename),
        headers={"Content-Disposition": _attachment(f"{stem}_analysis.txt")},
    )


def _attachment(filename: str) -> str:
    # en-têtes encodés en latin-1 : nom ASCII + filename* (RFC 5987) pour l'UTF-8
    ascii_name = filename.encode("ascii", "ignore").decode().replace('"', "").replace("\\", "")
    if not ascii_name.rsplit(".", 1)[0].strip(" ._-"):
        ascii_name = "document_analysis.txt"
    return f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(filename)}"
