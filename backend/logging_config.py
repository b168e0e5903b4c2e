import json
import logging
import os
import socket
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
SERVICE_NAME = os.getenv("SERVICE_NAME", "icy-outreach")

_RESERVED = {
    "name", "msg", "args", "levelname", "levelno", "pathname", "filename", "module",
    "exc_info", "exc_text", "stack_info", "lineno", "funcName", "created", "msecs",
    "relativeCreated", "thread", "threadName", "processName", "process", "message",
    "asctime", "taskName",
}

# Promoted out of "props" so log queries can filter on them directly
_TOP_LEVEL = ("component", "request_id", "influencer_id", "message_id")


def _utc_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        base: Dict[str, Any] = {
            "ts": _utc_iso(),
            "level": record.levelname,
            "logger": record.name,
            "service": SERVICE_NAME,
            "host": socket.gethostname(),
            "msg": record.getMessage(),
        }

        for key in _TOP_LEVEL:
            value = getattr(record, key, None)
            if value:
                base[key] = str(value)

        props: Dict[str, Any] = {}
        for k, v in record.__dict__.items():
            if k in _RESERVED or k in _TOP_LEVEL or k.startswith("_"):
                continue
            props[k] = v

        if props:
            base["props"] = props

        if record.exc_info:
            base["exc"] = self.formatException(record.exc_info)

        # UUIDs and datetimes show up in extras
        return json.dumps(base, ensure_ascii=False, default=str)


class _ComponentAdapter(logging.LoggerAdapter):
    """Keeps per-call extras alongside the bound component."""

    def process(self, msg, kwargs):
        kwargs["extra"] = {**self.extra, **(kwargs.get("extra") or {})}
        return msg, kwargs


def get_logger(name: str, component: Optional[str] = None) -> logging.Logger:
    logger = logging.getLogger(name)

    # Avoid duplicate handlers (uvicorn reload re-imports modules)
    if not logger.handlers:
        logger.setLevel(LOG_LEVEL)

        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JsonFormatter())

        logger.addHandler(handler)
        logger.propagate = False

    if component:
        return _ComponentAdapter(logger, {"component": component})  # type: ignore
    return logger
