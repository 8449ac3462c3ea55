# main.py
import uuid
from time import time

from fastapi import FastAPI, Request

from config import settings
from app.scripts.logging_config import setup_logging, get_logger, set_request_id

# 1) 로깅 설정(최우선)
# 운영 환경에서 JSON 로그를 원하면 LOG_JSON=true
setup_logging(json_fmt=settings.LOG_JSON)
logger = get_logger(__name__)

# 2) Firebase 초기화 (firestore 백엔드일 때만)
from app.services.firebase_app import init_firebase

if settings.ITEM_STORE_BACKEND.lower() == "firestore":
    init_firebase()

# 3) FastAPI 앱 + 챗봇 (intent corpus 는 여기서 한 번만 생성)
from app.services.chatbot import build_chatbot
from app.services.item_store import get_item_store

app = FastAPI(title="Campus Lost & Found Chatbot API")
app.state.chatbot = build_chatbot(get_item_store())

# 4) 요청 로깅 미들웨어
@app.middleware("http")
async def log_requests(request: Request, call_next):
    rid = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:12]
    set_request_id(rid)

    start = time()
    path = request.url.path
    method = request.method
    client_ip = getattr(request.client, 'host', '-') if request.client else '-'
    ua = request.headers.get('user-agent', '')[:120]

    logger.info("REQ start %s %s ip=%s ua=%r", method, path, client_ip, ua)

    response = None
    try:
        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
    finally:
        duration = (time() - start) * 1000
        status = getattr(response, 'status_code', 'NA')
        logger.info("REQ end %s %s status=%s %.1fms", method, path, status, duration)

# 5) CORS
from fastapi.middleware.cors import CORSMiddleware
allowed_origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
logger.info("CORS middleware configured for %s", allowed_origins)

# 6) 라우터
from app.api import chatbot, health

app.include_router(chatbot.router)
app.include_router(health.router)

# 7) 엔드포인트
@app.get("/")
def root():
    return {"message": "Lost & Found chatbot backend", "routes": [
        "/chatbot/message",
        "/chatbot/search",
        "/health",
        "/health/db",
    ]}
