"""Structured logging configuration."""

import logging
import sys
from typing import Any

import structlog
from pythonjsonlogger.json import JsonFormatter

from orderdesk.config import get_settings


def _build_handler(log_format: str) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    if log_format == "json":
        handler.setFormatter(
            JsonFormatter(
                fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
                rename_fields={"levelname": "level", "asctime": "timestamp"},
            )
        )
    else:
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
    return handler


def setup_logging() -> None:
    """Configure stdlib and structlog logging for the application."""
    settings = get_settings()
    log_level = getattr(logging, settings.log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()
    root_logger.addHandler(_build_handler(settings.log_format))

    renderer = (
        structlog.processors.JSONRenderer()
        if settings.log_format == "json"
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


class OrderAuditLogger:
    """Emits the order lifecycle events with a consistent set of keys."""

    def __init__(self, component: str):
        self.component = component
        self.logger = get_logger(component)

    def log_created(self, order_id: str, order_code: str, total_price: str, **kwargs: Any) -> None:
        """Log a successful order creation."""
        self.logger.info(
            "order_created",
            component=self.component,
            order_id=order_id,
            order_code=order_code,
            total_price=total_price,
            **kwargs,
        )

    def log_updated(self, order_id: str, fields: list[str], **kwargs: Any) -> None:
        """Log a committed partial update and which fields it touched."""
        self.logger.info(
            "order_updated",
            component=self.component,
            order_id=order_id,
            fields=fields,
            **kwargs,
        )

    def log_rejected(
        self,
        action: str,
        reason: str,
        kind: str,
        field: str | None = None,
        order_id: str | None = None,
    ) -> None:
        """Log a request that failed validation. Nothing was written."""
        self.logger.warning(
            "order_rejected",
            component=self.component,
            action=action,
            reason=reason,
            kind=kind,
            field=field,
            order_id=order_id,
        )

    def log_ranked(self, candidates: int, ranked: int, today: str) -> None:
        self.logger.debug(
            "orders_ranked",
            component=self.component,
            candidates=candidates,
            ranked=ranked,
            today=today,
        )
