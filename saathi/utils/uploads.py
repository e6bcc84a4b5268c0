from fastapi import HTTPException, UploadFile
from starlette.status import HTTP_400_BAD_REQUEST, HTTP_413_REQUEST_ENTITY_TOO_LARGE


def read_upload(file: UploadFile, max_upload_mb: int) -> bytes:
    """
    Lit un fichier uploadé en mémoire (jamais écrit sur disque).
    """
    contents = file.file.read()
    if len(contents) > max_upload_mb * 1024 * 1024:
        raise HTTPException(
            status_code=HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File too large (max {max_upload_mb} MB)",
        )
    if not contents:
        raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail="No file uploaded")
    return contents


def is_pdf_upload(file: UploadFile) -> bool:
    name = (file.filename or "").lower()
    return name.endswith(".pdf") or "pdf" in (file.content_type or "")
