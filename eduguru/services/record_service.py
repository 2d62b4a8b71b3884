# /eduguru/services/record_service.py

"""
Journals, attendance, scores and counseling notes: list, save (upsert by
id) and delete, always scoped to the authenticated teacher.
"""

import datetime as dt
import time
from typing import Dict, List, Optional

from ..models import counseling_model, journal_model
from .database_service import DatabaseService
from .import_helpers import record_ids


def _iso(value: Optional[dt.date]) -> Optional[str]:
    return value.isoformat() if value else None


# --- Serializers ---

def serialize_journal(entry) -> Dict:
    return {
        "id": entry.id,
        "date": _iso(entry.date),
        "classId": entry.class_id,
        "subject": entry.subject,
        "startTime": entry.start_time,
        "learningObjective": entry.learning_objective,
        "materials": entry.materials,
        "method": entry.method,
        "activities": entry.activities,
        "reflection": entry.reflection,
        "engagementLevel": entry.engagement_level,
        "createdAt": entry.created_at,
    }


def serialize_attendance(record) -> Dict:
    return {
        "id": record.id,
        "date": _iso(record.date),
        "studentId": record.student_id,
        "classId": record.class_id,
        "subject": record.subject,
        "status": record.status,
    }


def serialize_score(score) -> Dict:
    return {
        "id": score.id,
        "studentId": score.student_id,
        "classId": score.class_id,
        "subject": score.subject,
        "type": score.type,
        "score": score.score,
        "assessmentTitle": score.assessment_title,
        "date": _iso(score.date),
        "notes": score.notes,
    }


def serialize_counseling(session, student_name: Optional[str] = None) -> Dict:
    return {
        "id": session.id,
        "studentId": session.student_id,
        "studentName": student_name,
        "date": _iso(session.date),
        "type": session.type,
        "notes": session.notes,
        "followUp": session.follow_up,
        "aiSuggestion": session.ai_suggestion,
        "isPrivate": bool(session.is_private),
    }


# --- Journals ---

def get_journals(db: DatabaseService, user_id: str) -> List[Dict]:
    return [serialize_journal(j) for j in db.get_journals(user_id=user_id)]


def save_journal(journal: journal_model.JournalSave, db: DatabaseService, user_id: str) -> Dict:
    """Creates the entry, or overwrites its content if the id already exists."""
    record = {
        "id": journal.id or record_ids.generate_id("jrn"),
        "date": journal.date,
        "class_id": journal.classId,
        "subject": journal.subject,
        "start_time": journal.startTime,
        "learning_objective": journal.learningObjective,
        "materials": journal.materials,
        "method": journal.method,
        "activities": journal.activities,
        "reflection": journal.reflection,
        "engagement_level": journal.engagementLevel,
        "created_at": journal.createdAt or int(time.time() * 1000),
        "user_id": user_id,
    }
    return serialize_journal(db.upsert_journal(record))


def delete_journal(journal_id: str, db: DatabaseService, user_id: str) -> bool:
    return db.delete_journal(journal_id=journal_id, user_id=user_id)


# --- Attendance & Scores ---

def get_attendance(
    db: DatabaseService,
    user_id: str,
    class_id: Optional[str] = None,
    date: Optional[dt.date] = None,
    subject: Optional[str] = None,
) -> List[Dict]:
    records = db.get_attendance(user_id=user_id, class_id=class_id, date=date, subject=subject)
    return [serialize_attendance(r) for r in records]


def get_scores(
    db: DatabaseService,
    user_id: str,
    class_id: Optional[str] = None,
    subject: Optional[str] = None,
    assessment_type: Optional[str] = None,
) -> List[Dict]:
    scores = db.get_scores(user_id=user_id, class_id=class_id, subject=subject, assessment_type=assessment_type)
    return [serialize_score(s) for s in scores]


# --- Counseling ---

def get_counseling_sessions(db: DatabaseService, user_id: str, student_id: Optional[str] = None) -> List[Dict]:
    rows = db.get_counseling_sessions(user_id=user_id, student_id=student_id)
    return [serialize_counseling(session, name) for session, name in rows]


def save_counseling(session: counseling_model.CounselingSave, db: DatabaseService, user_id: str) -> Dict:
    if not db.get_student_by_id(student_id=session.studentId, user_id=user_id):
        raise ValueError(f"Student with ID {session.studentId} not found")

    record = {
        "id": session.id or record_ids.generate_id("cns"),
        "student_id": session.studentId,
        "date": session.date,
        "type": session.type,
        "notes": session.notes,
        "follow_up": session.followUp,
        "ai_suggestion": session.aiSuggestion,
        "is_private": session.isPrivate,
        "user_id": user_id,
    }
    saved = db.upsert_counseling(record)
    student = db.get_student_by_id(student_id=saved.student_id, user_id=user_id)
    return serialize_counseling(saved, student.name if student else None)


def delete_counseling(session_id: str, db: DatabaseService, user_id: str) -> bool:
    return db.delete_counseling(session_id=session_id, user_id=user_id)
