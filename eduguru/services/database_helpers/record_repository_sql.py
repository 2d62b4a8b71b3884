# /eduguru/services/database_helpers/record_repository_sql.py

"""
Queries for the transactional record tables: journals, attendance, scores
and counseling sessions. All reads are scoped to the owner.
"""

import datetime as dt
from typing import Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from ...core.errors import OwnershipConflictError
from ...db.models.class_student_models import Student
from ...db.models.record_models import AttendanceRecord, CounselingSession, JournalEntry, StudentScore


class RecordRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def _upsert(self, model, kind: str, record: Dict, mutable_fields):
        """Single-record insert-or-update by id, committed immediately."""
        existing = self.db.get(model, record["id"])
        if existing is None:
            existing = model(**record)
            self.db.add(existing)
        elif existing.user_id != record["user_id"]:
            raise OwnershipConflictError(kind, record["id"])
        else:
            for field in mutable_fields:
                setattr(existing, field, record.get(field))
        self.db.commit()
        self.db.refresh(existing)
        return existing

    # --- Journal Methods ---

    def _journals_query(self, user_id: str):
        return (
            self.db.query(JournalEntry)
            .filter(JournalEntry.user_id == user_id)
            .order_by(JournalEntry.date.desc(), JournalEntry.created_at.desc())
        )

    def get_journals(self, user_id: str) -> List[JournalEntry]:
        return self._journals_query(user_id).all()

    def get_recent_journals(self, user_id: str, limit: int = 5) -> List[JournalEntry]:
        return self._journals_query(user_id).limit(limit).all()

    def count_journals_between(self, user_id: str, start: dt.date, end: dt.date) -> int:
        return (
            self.db.query(JournalEntry)
            .filter(JournalEntry.user_id == user_id, JournalEntry.date >= start, JournalEntry.date < end)
            .count()
        )

    def upsert_journal(self, record: Dict) -> JournalEntry:
        # created_at is kept from the first save.
        content_fields = (
            "date", "class_id", "subject", "start_time", "learning_objective", "materials",
            "method", "activities", "reflection", "engagement_level",
        )
        return self._upsert(JournalEntry, "journal", record, content_fields)

    def delete_journal(self, journal_id: str, user_id: str) -> bool:
        deleted = (
            self.db.query(JournalEntry)
            .filter(JournalEntry.id == journal_id, JournalEntry.user_id == user_id)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        return deleted > 0

    # --- Attendance Methods ---

    def get_attendance(
        self,
        user_id: str,
        class_id: Optional[str] = None,
        date: Optional[dt.date] = None,
        subject: Optional[str] = None,
    ) -> List[AttendanceRecord]:
        query = self.db.query(AttendanceRecord).filter(AttendanceRecord.user_id == user_id)
        if class_id:
            query = query.filter(AttendanceRecord.class_id == class_id)
        if date:
            query = query.filter(AttendanceRecord.date == date)
        if subject:
            query = query.filter(AttendanceRecord.subject == subject)
        return query.order_by(AttendanceRecord.date, AttendanceRecord.student_id).all()

    def get_attendance_for_year(self, user_id: str, class_id: str, year: int) -> List[AttendanceRecord]:
        return (
            self.db.query(AttendanceRecord)
            .filter(
                AttendanceRecord.user_id == user_id,
                AttendanceRecord.class_id == class_id,
                AttendanceRecord.date >= dt.date(year, 1, 1),
                AttendanceRecord.date <= dt.date(year, 12, 31),
            )
            .all()
        )

    # --- Score Methods ---

    def get_scores(
        self,
        user_id: str,
        class_id: Optional[str] = None,
        subject: Optional[str] = None,
        assessment_type: Optional[str] = None,
    ) -> List[StudentScore]:
        query = self.db.query(StudentScore).filter(StudentScore.user_id == user_id)
        if class_id:
            query = query.filter(StudentScore.class_id == class_id)
        if subject:
            query = query.filter(StudentScore.subject == subject)
        if assessment_type:
            query = query.filter(StudentScore.type == assessment_type)
        return query.order_by(StudentScore.date, StudentScore.id).all()

    # --- Counseling Methods ---

    def get_counseling_sessions(self, user_id: str, student_id: Optional[str] = None) -> List[Tuple[CounselingSession, Optional[str]]]:
        query = (
            self.db.query(CounselingSession, Student.name)
            .outerjoin(Student, CounselingSession.student_id == Student.id)
            .filter(CounselingSession.user_id == user_id)
        )
        if student_id:
            query = query.filter(CounselingSession.student_id == student_id)
        return query.order_by(CounselingSession.date.desc(), CounselingSession.created_at.desc()).all()

    def upsert_counseling(self, record: Dict) -> CounselingSession:
        return self._upsert(CounselingSession, "counseling", record, ("notes", "follow_up", "ai_suggestion"))

    def delete_counseling(self, session_id: str, user_id: str) -> bool:
        deleted = (
            self.db.query(CounselingSession)
            .filter(CounselingSession.id == session_id, CounselingSession.user_id == user_id)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        return deleted > 0
