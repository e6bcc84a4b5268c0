from fastapi import APIRouter, Depends

from saathi.core.deps import get_chat_service
from saathi.models.chat import ChatRequest, ChatResponse, DocumentChatRequest, DocumentChatResponse
from saathi.services.chat_service import ChatService

router = APIRouter(prefix="/v1", tags=["chat"])


@router.post("/chat", response_model=ChatResponse)
def chat(body: ChatRequest, service: ChatService = Depends(get_chat_service)):
    return service.reply(body.prompt)


@router.post("/document-chat", response_model=DocumentChatResponse)
def document_chat(body: DocumentChatRequest, service: ChatService = Depends(get_chat_service)):
    return service.ask_document(body.message, body.documentText)
