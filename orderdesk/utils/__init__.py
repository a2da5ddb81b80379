"""Utility modules."""

from orderdesk.utils.logging import OrderAuditLogger, get_logger, setup_logging

__all__ = ["setup_logging", "get_logger", "OrderAuditLogger"]
