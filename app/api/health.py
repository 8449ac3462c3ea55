from fastapi import APIRouter, HTTPException, Request

from app.services.item_store import ItemStoreError
from app.scripts.logging_config import get_logger

logger = get_logger("health")

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
def health():
    return {"status": "ok"}


@router.get("/db")
def health_db(request: Request):
    try:
        request.app.state.chatbot.store.ping()
    except ItemStoreError as e:
        logger.warning("health.db unavailable err=%s", e)
        raise HTTPException(status_code=503, detail="db_unavailable")
    return {"status": "ok", "db": "connected"}
