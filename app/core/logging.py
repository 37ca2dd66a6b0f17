"""
Logging configuration.
"""

import json
import logging
import sys
from typing import Any, Dict, cast

from loguru import logger

from app.core.config import settings

# Stdlib loggers routed through loguru instead of their own handlers
INTERCEPTED_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access", "fastapi", "sqlalchemy.engine")


class InterceptHandler(logging.Handler):
    """
    Forward standard logging records to loguru.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: Any = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Report the caller of the stdlib logger, not this handler
        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def serialize_record(record: Dict[str, Any]) -> str:
    """
    Render a loguru record as one JSON line.
    """
    try:
        payload = {
            "timestamp": record["time"].isoformat(),
            "level": record["level"].name,
            "message": record["message"],
            "service": settings.SERVICE_NAME,
            "mode": settings.APP_MODE,
        }

        for key in ("name", "function", "line"):
            if key in record:
                payload["module" if key == "name" else key] = record[key]

        for key, value in (record.get("extra") or {}).items():
            if not key.startswith("_"):
                payload[key] = value

        if record.get("exception"):
            payload["exception"] = str(record["exception"])

        return json.dumps(payload)
    except Exception as e:
        return json.dumps(
            {
                "timestamp": str(record.get("time", "")),
                "level": "ERROR",
                "message": f"Error serializing log: {e}",
                "original_message": str(record.get("message", "")),
                "service": settings.SERVICE_NAME,
            }
        )


def configure_logging() -> None:
    """
    Configure loguru and intercept standard logging.
    """
    logger.remove()

    if settings.JSON_LOGS:
        logger.add(
            lambda msg: print(serialize_record(cast(Dict[str, Any], msg.record)), file=sys.stderr),
            level=settings.log_level,
            backtrace=True,
            diagnose=not settings.is_release,
        )
    else:
        logger.add(
            sys.stderr,
            level=settings.log_level,
            format="{time:YYYY/MM/DD - HH:mm:ss} | {level: <8} | {message} | {extra}",
            backtrace=True,
            diagnose=not settings.is_release,
        )

    logging.getLogger().handlers = [InterceptHandler()]

    for name in INTERCEPTED_LOGGERS:
        std_logger = logging.getLogger(name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.propagate = False

    # The access middleware writes request lines itself
    logging.getLogger("uvicorn.access").disabled = True

    logger.info(f"Logging configured ({settings.APP_MODE} mode, level {settings.log_level})")
