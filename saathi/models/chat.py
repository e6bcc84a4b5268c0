from pydantic import BaseModel, Field


class ChatRequest(BaseModel):
    prompt: str = Field(..., min_length=1, description="Message de l'utilisateur")


class ChatResponse(BaseModel):
    message: str


class DocumentChatRequest(BaseModel):
    message: str = Field(..., min_length=1, description="Question sur le document")
    documentText: str = Field(..., min_length=1, description="Texte extrait du document analysé")


class DocumentChatResponse(BaseModel):
    response: str
    status: str = "success"
