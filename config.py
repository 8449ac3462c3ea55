from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env.local", env_file_encoding="utf-8", extra="ignore")

    # Firebase
    GOOGLE_APPLICATION_CREDENTIALS: Optional[str] = None
    FIREBASE_CREDENTIALS_JSON_STRING: Optional[str] = None

    # 저장소 선택: firestore (기본) | memory (로컬/테스트)
    ITEM_STORE_BACKEND: str = "firestore"
    ITEMS_COLLECTION: str = "items"
    TAGS_COLLECTION: str = "tags"
    # Firestore 는 부분 문자열 검색이 없으므로 최신 N개 문서를 읽고 메모리에서 필터링
    FIRESTORE_SCAN_LIMIT: int = 500

    # Chatbot intent 분류
    CHATBOT_INTENT_MIN_SCORE: float = 0.2
    CHATBOT_SEARCH_MIN_LENGTH: int = 6
    CHATBOT_HEURISTIC_MIN_KEYWORDS: int = 3

    # Chatbot 검색
    CHATBOT_SEARCH_MAX_KEYWORDS: int = 8
    CHATBOT_TAG_LOOKUP_LIMIT: int = 10
    CHATBOT_CANDIDATE_LIMIT: int = 50
    CHATBOT_MAX_SUGGESTIONS: int = 6
    CHATBOT_SNIPPET_MAX_CHARS: int = 140

    # logging
    LOG_JSON: bool = False


settings = Settings()
