"""
Centralized logging module for the multi-tenant API.

Follows Layer 6 rules:
- Structured logging suitable for Grafana/Loki/ELK
- Appropriate log levels (info, warning, error)
- NEVER logs passwords, password hashes, bearer tokens or secrets
- Security-sensitive actions emit structured logs with user_id, tenant_id, action, result, timestamp
"""
import logging
import json
from logging.handlers import TimedRotatingFileHandler
from typing import Any, Dict, Optional
from datetime import datetime, timezone

from core.config import settings

_EXTRA_FIELDS = ("user_id", "tenant_id", "action", "result", "meta")

# Configure root logger
logger = logging.getLogger("multitenant")
logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))


# JSON formatter for structured logging
class JSONFormatter(logging.Formatter):
    """Formatter that outputs structured JSON logs."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for field in _EXTRA_FIELDS:
            if hasattr(record, field):
                log_data[field] = getattr(record, field)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


# Console handler
_handler = logging.StreamHandler()
_handler.setFormatter(JSONFormatter())
logger.addHandler(_handler)

# Daily file, same layout as the console
if settings.LOG_FILE:
    _file_handler = TimedRotatingFileHandler(settings.LOG_FILE, when="midnight", backupCount=14, encoding="utf-8")
    _file_handler.setFormatter(JSONFormatter())
    logger.addHandler(_file_handler)

# Prevent duplicate logs
logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Child of the application logger, so it shares its handlers."""
    return logger.getChild(name)


def log_security_event(
    action: str,
    result: str,
    user_id: Optional[str] = None,
    tenant_id: Optional[str] = None,
    meta: Optional[Dict[str, Any]] = None,
    level: str = "info",
) -> None:
    """
    Log security-sensitive actions (login, failed login, password changes, registration).

    Emits structured logs with:
    - user_id, tenant_id, action, result, timestamp
    - Additional metadata in meta dict

    Args:
        action: Action name (e.g., "login", "change_password", "register")
        result: Result status (e.g., "success", "failure")
        user_id: User ID (optional)
        tenant_id: Tenant ID (optional)
        meta: Additional metadata dict (optional)
        level: Log level ("info", "warning", "error")
    """
    log_method = getattr(logger, level.lower(), logger.info)
    extra: Dict[str, Any] = {
        "action": action,
        "result": result,
    }
    if user_id:
        extra["user_id"] = user_id
    if tenant_id:
        extra["tenant_id"] = tenant_id
    if meta:
        extra["meta"] = meta

    log_method("Security event", extra=extra)
