from enum import Enum
from pydantic import BaseModel, Field


class NotesSource(str, Enum):
    topic = "topic"
    text = "text"
    url = "url"
    pdf = "pdf"


class NotesTopicRequest(BaseModel):
    topic: str = Field(..., min_length=1)


class NotesTextRequest(BaseModel):
    text: str = Field(..., min_length=1)


class NotesUrlRequest(BaseModel):
    url: str


class NotesResponse(BaseModel):
    notes: str = Field(..., description="Notes au format Markdown")
    source: NotesSource
