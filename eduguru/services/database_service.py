# /eduguru/services/database_service.py

import datetime as dt
from typing import Dict, List, Optional, Set, Tuple

import pandas as pd
from fastapi import Depends
from sqlalchemy.orm import Session

# --- Core Database Setup ---
from ..db.database import get_db

# --- Repository Imports ---
from .database_helpers.user_repository_sql import UserRepositorySQL
from .database_helpers.class_student_repository_sql import ClassStudentRepositorySQL
from .database_helpers.record_repository_sql import RecordRepositorySQL
from .database_helpers.bulk_repository_sql import BulkRepositorySQL

from ..db.models.user_model import User
from ..db.models.class_student_models import ClassGroup, Student
from ..db.models.record_models import AttendanceRecord, CounselingSession, JournalEntry, StudentScore


class DatabaseService:
    def __init__(self, db_session: Session):
        """
        Single entry point to the data layer. Every repository shares the same
        session, so a bulk import that touches several tables still runs in
        one transaction.
        """
        if db_session is None:
            raise ValueError("A database session is required.")
        self.session = db_session
        self.user_repo = UserRepositorySQL(db_session)
        self.class_student_repo = ClassStudentRepositorySQL(db_session)
        self.record_repo = RecordRepositorySQL(db_session)
        self.bulk_repo = BulkRepositorySQL(db_session)

    # --- USER METHODS (DELEGATED) ---
    def get_user_by_id(self, user_id: str) -> Optional[User]: return self.user_repo.get_user_by_id(user_id)
    def get_user_by_username(self, username: str) -> Optional[User]: return self.user_repo.get_user_by_username(username)
    def add_user(self, record: Dict) -> User: return self.user_repo.add_user(record)
    def update_user(self, user_id: str, data: Dict) -> Optional[User]: return self.user_repo.update_user(user_id, data)

    # --- CLASS & STUDENT METHODS (DELEGATED) ---
    def get_all_classes(self, user_id: str) -> List[ClassGroup]: return self.class_student_repo.get_all_classes(user_id)
    def get_class_by_id(self, class_id: str, user_id: str) -> Optional[ClassGroup]: return self.class_student_repo.get_class_by_id(class_id, user_id)
    def get_class_ids(self, user_id: str) -> Set[str]: return self.class_student_repo.get_class_ids(user_id)
    def add_class(self, record: Dict) -> ClassGroup: return self.class_student_repo.add_class(record)
    def update_class(self, class_id: str, user_id: str, data: Dict) -> Optional[ClassGroup]: return self.class_student_repo.update_class(class_id, user_id, data)
    def delete_class(self, class_id: str, user_id: str) -> bool: return self.class_student_repo.delete_class(class_id, user_id)
    def delete_all_classes(self, user_id: str) -> int: return self.class_student_repo.delete_all_classes(user_id)
    def get_students(self, user_id: str, class_id: Optional[str] = None) -> List[Tuple[Student, Optional[str]]]: return self.class_student_repo.get_students(user_id, class_id)
    def get_student_by_id(self, student_id: str, user_id: str) -> Optional[Student]: return self.class_student_repo.get_student_by_id(student_id, user_id)
    def get_student_ids(self, user_id: str) -> Set[str]: return self.class_student_repo.get_student_ids(user_id)
    def add_student(self, record: Dict) -> Student: return self.class_student_repo.add_student(record)
    def update_student(self, student_id: str, user_id: str, data: Dict) -> Optional[Student]: return self.class_student_repo.update_student(student_id, user_id, data)
    def delete_student(self, student_id: str, user_id: str) -> bool: return self.class_student_repo.delete_student(student_id, user_id)
    def delete_all_students(self, user_id: str) -> int: return self.class_student_repo.delete_all_students(user_id)
    def get_students_as_dataframe(self, user_id: str) -> pd.DataFrame: return self.class_student_repo.get_students_as_dataframe(user_id)

    # --- SUBJECT METHODS (DELEGATED) ---
    def get_subject_names(self, user_id: str) -> List[str]: return self.class_student_repo.get_subject_names(user_id)
    def add_subject(self, name: str, user_id: str) -> bool: return self.class_student_repo.add_subject(name, user_id)
    def delete_subject(self, name: str, user_id: str) -> bool: return self.class_student_repo.delete_subject(name, user_id)
    def delete_all_subjects(self, user_id: str) -> int: return self.class_student_repo.delete_all_subjects(user_id)

    # --- JOURNAL & COUNSELING METHODS (DELEGATED) ---
    def get_journals(self, user_id: str) -> List[JournalEntry]: return self.record_repo.get_journals(user_id)
    def get_recent_journals(self, user_id: str, limit: int = 5) -> List[JournalEntry]: return self.record_repo.get_recent_journals(user_id, limit)
    def count_journals_between(self, user_id: str, start: dt.date, end: dt.date) -> int: return self.record_repo.count_journals_between(user_id, start, end)
    def upsert_journal(self, record: Dict) -> JournalEntry: return self.record_repo.upsert_journal(record)
    def delete_journal(self, journal_id: str, user_id: str) -> bool: return self.record_repo.delete_journal(journal_id, user_id)
    def get_counseling_sessions(self, user_id: str, student_id: Optional[str] = None) -> List[Tuple[CounselingSession, Optional[str]]]: return self.record_repo.get_counseling_sessions(user_id, student_id)
    def upsert_counseling(self, record: Dict) -> CounselingSession: return self.record_repo.upsert_counseling(record)
    def delete_counseling(self, session_id: str, user_id: str) -> bool: return self.record_repo.delete_counseling(session_id, user_id)

    # --- ATTENDANCE & SCORE METHODS (DELEGATED) ---
    def get_attendance(self, user_id: str, class_id: Optional[str] = None, date: Optional[dt.date] = None, subject: Optional[str] = None) -> List[AttendanceRecord]:
        return self.record_repo.get_attendance(user_id, class_id=class_id, date=date, subject=subject)
    def get_attendance_for_year(self, user_id: str, class_id: str, year: int) -> List[AttendanceRecord]: return self.record_repo.get_attendance_for_year(user_id, class_id, year)
    def get_scores(self, user_id: str, class_id: Optional[str] = None, subject: Optional[str] = None, assessment_type: Optional[str] = None) -> List[StudentScore]:
        return self.record_repo.get_scores(user_id, class_id=class_id, subject=subject, assessment_type=assessment_type)

    # --- BULK RECONCILIATION METHODS (DELEGATED, UNCOMMITTED) ---
    def upsert_class_pending(self, record: Dict) -> None: self.bulk_repo.upsert_class(record)
    def upsert_student_pending(self, record: Dict) -> None: self.bulk_repo.upsert_student(record)
    def upsert_attendance_pending(self, record: Dict) -> None: self.bulk_repo.upsert_attendance(record)
    def upsert_score_pending(self, record: Dict) -> None: self.bulk_repo.upsert_score(record)
    def insert_subject_pending(self, name: str, user_id: str) -> bool: return self.bulk_repo.insert_subject_if_absent(name, user_id)
    def commit(self) -> None: self.bulk_repo.commit()
    def rollback(self) -> None: self.bulk_repo.rollback()


def get_db_service(db: Session = Depends(get_db)) -> DatabaseService:
    return DatabaseService(db_session=db)
