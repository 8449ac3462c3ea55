# logging_config.py
import logging
import logging.config
import logging.handlers
from pathlib import Path
from datetime import datetime
import json
import contextvars

# 요청 단위 식별자(ContextVar로 보관)
_request_id_ctx = contextvars.ContextVar("request_id", default="-")

# 사용자 원문은 이 길이까지만 로그에 남김
MESSAGE_PREVIEW_CHARS = 120

class RequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = _request_id_ctx.get("-")
        return True

def set_request_id(req_id: str):
    _request_id_ctx.set(req_id)

def get_logger(name: str = __name__) -> logging.Logger:
    return logging.getLogger(name)

# 로그 디렉터리
LOG_DIR = Path("logs")

def build_dict_config(json_fmt: bool = False) -> dict:
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    fmt = (
        '{"ts":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s",'
        '"request_id":"%(request_id)s","msg":"%(message)s"}'
        if json_fmt
        else '%(asctime)s | %(levelname)s | %(name)s | rid=%(request_id)s | %(message)s'
    )

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "request_id": {"()": RequestIdFilter},
        },
        "formatters": {
            "default": {
                "format": fmt,
                "datefmt": "%Y-%m-%d %H:%M:%S",
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": "INFO",
                "formatter": "default",
                "filters": ["request_id"],
            },
            "file_app": {
                "class": "logging.handlers.TimedRotatingFileHandler",
                "level": "INFO",
                "formatter": "default",
                "filters": ["request_id"],
                "filename": str(LOG_DIR / "app.log"),
                "when": "midnight",
                "interval": 1,
                "backupCount": 30,
                "encoding": "utf-8",
            },
            "file_chatbot": {
                "class": "logging.handlers.TimedRotatingFileHandler",
                "level": "INFO",
                "formatter": "default",
                "filters": ["request_id"],
                "filename": str(LOG_DIR / "chatbot.log"),
                "when": "midnight",
                "interval": 1,
                "backupCount": 30,
                "encoding": "utf-8",
            },
        },
        "loggers": {
            # 루트 로거: 앱 전반
            "": {
                "level": "INFO",
                "handlers": ["console", "file_app"],
            },
            # 챗봇 intent/검색 이벤트 전용 로거
            "chatbot": {
                "level": "INFO",
                "handlers": ["console", "file_chatbot"],
                "propagate": False,
            },
            # uvicorn 로거 레벨 통일
            "uvicorn": {"level": "INFO"},
            "uvicorn.error": {"level": "INFO"},
            "uvicorn.access": {"level": "INFO"},
        },
    }

def setup_logging(json_fmt: bool = False):
    logging.config.dictConfig(build_dict_config(json_fmt=json_fmt))

def preview(text: str | None, limit: int = MESSAGE_PREVIEW_CHARS) -> str:
    if not text:
        return ""
    flat = text.replace("\n", " ")
    if len(flat) <= limit:
        return flat
    return flat[:limit] + "..."

# ===== 챗봇 이벤트 보조 함수들 =====
def log_chatbot_event(event_type: str, details: dict, logger: logging.Logger | None = None):
    logger = logger or get_logger("chatbot")
    logger.info("CHATBOT_EVENT: %s", json.dumps({
        "timestamp": datetime.now().isoformat(),
        "event_type": event_type,
        "details": details
    }, ensure_ascii=False))

def log_search_summary(keywords: list, desired_type: str | None, tag_ids: list,
                       candidate_count: int, result_ids: list,
                       logger: logging.Logger | None = None):
    logger = logger or get_logger("chatbot")
    summary = {
        'keywords': keywords,
        'desired_type': desired_type,
        'tag_ids': tag_ids,
        'candidate_count': candidate_count,
        'result_ids': result_ids,
    }
    logger.info("검색 완료: %s", json.dumps(summary, ensure_ascii=False))
