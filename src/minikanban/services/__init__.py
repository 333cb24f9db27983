"""Service layer for business logic."""

from .audit_service import AuditService
from .board_service import BoardService
from .config_service import ConfigService
from .integrity_service import IntegrityIssue, IntegrityService
from .query_service import EstimateFilter, Query, QueryService
from .review_service import ReviewService, ReviewSummary
from .task_service import TaskService
from .transfer_service import ImportFailure, ImportResult, ImportSuccess, TransferService

__all__ = [
    "AuditService",
    "BoardService",
    "ConfigService",
    "EstimateFilter",
    "ImportFailure",
    "ImportResult",
    "ImportSuccess",
    "IntegrityIssue",
    "IntegrityService",
    "Query",
    "QueryService",
    "ReviewService",
    "ReviewSummary",
    "TaskService",
    "TransferService",
]
