# /eduguru/services/dashboard_service.py

import datetime as dt
import logging
from typing import Optional

from ..models.dashboard_model import DashboardStats
from .database_service import DatabaseService
from . import record_service

logger = logging.getLogger(__name__)

HOURS_PER_JOURNAL = 2


def _month_bounds(today: dt.date):
    start = today.replace(day=1)
    end = (start.replace(year=start.year + 1, month=1) if start.month == 12
           else start.replace(month=start.month + 1))
    return start, end


def get_stats(db: DatabaseService, user_id: str, today: Optional[dt.date] = None) -> DashboardStats:
    """
    Counts the teacher's students and classes, this month's journal entries
    (each counted as two teaching hours) and the five most recent entries.
    """
    try:
        start, end = _month_bounds(today or dt.date.today())
        journal_count = db.count_journals_between(user_id, start, end)
        return DashboardStats(
            studentCount=len(db.get_students(user_id=user_id)),
            classCount=len(db.get_all_classes(user_id=user_id)),
            journalCount=journal_count,
            teachingHours=journal_count * HOURS_PER_JOURNAL,
            recentActivity=[record_service.serialize_journal(j) for j in db.get_recent_journals(user_id, limit=5)],
        )
    except Exception:
        logger.exception("Failed to calculate dashboard stats for user %s", user_id)
        raise
