"""Moderation module.

Provides the comment report pipeline:
- Report intake as an idempotent saga (flag, report, notify)
- Hourly per-reporter rate limiting through Redis
- Admin listing and resolution of reports
"""

from .models import (
    MODERATION_TABLES_CQL,
    Report,
    ReportAction,
    ReportStatus,
)
from .service import ModerationPipeline, ReportView


__all__ = [
    "MODERATION_TABLES_CQL",
    "ModerationPipeline",
    "Report",
    "ReportAction",
    "ReportStatus",
    "ReportView",
]
