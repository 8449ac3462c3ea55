from pydantic import BaseModel
from typing import Any, List, Optional, Union

class ChatbotRequest(BaseModel):
    message: Any = None  # 타입/빈 값 검증은 라우터에서 처리 (문자열이 아니면 400 message_required)

class ChatbotSuggestion(BaseModel):
    id: int
    title: str
    type: str  # 'lost' | 'found'
    imageUrl: Optional[str] = None
    descriptionSnippet: str
    score: int
    link: str

class FixedReplyResponse(BaseModel):
    intent: str
    reply: str

class SearchReplyResponse(BaseModel):
    intent: str
    reply: str
    keywords: List[str]
    suggestions: List[ChatbotSuggestion]

ChatbotResponse = Union[SearchReplyResponse, FixedReplyResponse]

def to_response_model(payload: dict) -> ChatbotResponse:
    if "suggestions" in payload:
        return SearchReplyResponse(**payload)
    return FixedReplyResponse(**payload)
