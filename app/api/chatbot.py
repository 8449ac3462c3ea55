from fastapi import APIRouter, Depends, HTTPException, Request

from app.models.chatbot import ChatbotRequest, ChatbotResponse, SearchReplyResponse, to_response_model
from app.services.chatbot import Chatbot, reply_to_payload
from app.services.item_store import ItemStoreError
from app.scripts.logging_config import get_logger, preview

logger = get_logger("chatbot.api")

router = APIRouter(prefix="/chatbot", tags=["chatbot"])

MAX_MESSAGE_CHARS = 1000


def get_chatbot(request: Request) -> Chatbot:
    return request.app.state.chatbot


def _validated_message(req: ChatbotRequest) -> str:
    message = req.message
    if not isinstance(message, str) or not message.strip():
        raise HTTPException(status_code=400, detail="message_required")
    if len(message) > MAX_MESSAGE_CHARS:
        raise HTTPException(status_code=413, detail="message_too_long")
    return message


@router.post("/message", response_model=ChatbotResponse)
def chatbot_message(req: ChatbotRequest, chatbot: Chatbot = Depends(get_chatbot)):
    message = _validated_message(req)
    try:
        reply = chatbot.handle_message(message)
    except ItemStoreError as e:
        # 저장소 장애를 "결과 없음"으로 위장하지 않음
        logger.error("chatbot.message store_error err=%s msg=%r", e, preview(message))
        raise HTTPException(status_code=503, detail="item_store_unavailable")
    return to_response_model(reply_to_payload(reply))


@router.post("/search", response_model=SearchReplyResponse)
def chatbot_search(req: ChatbotRequest, chatbot: Chatbot = Depends(get_chatbot)):
    message = _validated_message(req)
    try:
        reply = chatbot.search(message)
    except ItemStoreError as e:
        logger.error("chatbot.search store_error err=%s msg=%r", e, preview(message))
        raise HTTPException(status_code=503, detail="item_store_unavailable")
    return SearchReplyResponse(**reply_to_payload(reply))
