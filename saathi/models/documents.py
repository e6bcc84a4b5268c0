from typing import List, Optional
from pydantic import BaseModel, Field


class BasicStats(BaseModel):
    wordCount: int = Field(..., ge=0)
    charCount: int = Field(..., ge=0)
    lineCount: int = Field(..., ge=0)
    paragraphCount: int = Field(..., ge=0)
    pageCount: Optional[int] = Field(None, description="PDF uniquement")


class ContentAnalysis(BaseModel):
    topKeywords: List[str]
    averageWordLength: float
    readingTime: str
    languageDetected: str
    sentiment: str  # Positive | Negative | Neutral
    complexity: str  # Low | Medium | High


class DocumentAnalysis(BaseModel):
    basicStats: BasicStats
    contentAnalysis: ContentAnalysis
    keyInsights: List[str]
    summary: str
    preview: str


class AnalyzeResponse(BaseModel):
    analysis: DocumentAnalysis
    text: str = Field(..., description="Texte extrait (contexte du chat sur document)")
