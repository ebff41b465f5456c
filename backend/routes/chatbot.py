# backend/routes/chatbot.py
from datetime import datetime, timezone
from fastapi import APIRouter

from schemas.chatbot import ChatRequest, ChatResponse, SuggestionsResponse
from services import errors
from utils import chatbot

router = APIRouter(prefix="/chatbot", tags=["Chatbot"])


@router.post("/chat", response_model=ChatResponse)
def chat(payload: ChatRequest):
    if not payload.message or not payload.message.strip():
        raise errors.ValidationError("Message is required", field="message")
    return ChatResponse(
        response=chatbot.respond(payload.message),
        timestamp=datetime.now(timezone.utc),
    )


@router.get("/suggestions", response_model=SuggestionsResponse)
def suggestions():
    return SuggestionsResponse(suggestions=list(chatbot.SUGGESTIONS))
