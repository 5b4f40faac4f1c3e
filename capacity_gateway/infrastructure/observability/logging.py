"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from capacity_gateway.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_ranking(request_id: str, project_id: str, eligible_count: int, bank_count: int) -> None:
    """Log single-project ranking outcome"""
    logging.info(
        "Ranking completed",
        extra={
            "request_id": request_id,
            "project_id": project_id,
            "step": "ranking_complete",
            "eligible_banks": eligible_count,
            "banks_evaluated": bank_count,
        },
    )


def log_optimization(
    request_id: str,
    planned_count: int,
    forced_count: int,
    assigned_count: int,
    unassigned_count: int,
    duration_ms: float,
) -> None:
    """Log structured optimizer outcome for analysis"""
    logging.info(
        "Optimization completed",
        extra={
            "request_id": request_id,
            "step": "optimization_complete",
            "planned_projects": planned_count,
            "forced": forced_count,
            "assigned": assigned_count,
            "unassigned": unassigned_count,
            "duration_ms": duration_ms,
        },
    )


def log_skipped_forced_assignment(request_id: str, project_id: str, bank_id: str) -> None:
    logging.warning(
        "Forced assignment skipped: unknown planned project or bank",
        extra={
            "request_id": request_id,
            "project_id": project_id,
            "bank_id": bank_id,
            "step": "forced_assignment_skipped",
        },
    )


def log_commit(request_id: str, committed_count: int, skipped_count: int) -> None:
    logging.info(
        "Allocations committed",
        extra={
            "request_id": request_id,
            "step": "allocation_commit",
            "committed": committed_count,
            "skipped": skipped_count,
        },
    )
