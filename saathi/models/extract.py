from typing import Optional
from pydantic import BaseModel, Field


class UrlRequest(BaseModel):
    url: str = Field(..., description="Adresse http(s) de la page à lire")


class ExtractTextResponse(BaseModel):
    text: str
    pageCount: Optional[int] = Field(None, ge=0, description="Nombre de pages (PDF uniquement)")
