# /eduguru/services/database_helpers/bulk_repository_sql.py

"""
Statement-level building blocks for bulk reconciliation.

Nothing here commits. Each upsert flushes immediately so the statements hit
the database in input order, a repeated id later in the same batch finds
the row written earlier, and constraint violations surface at the offending
row. The caller owns the transaction and decides between commit and
rollback.
"""

from typing import Dict, Iterable

from sqlalchemy.orm import Session

from ...core.errors import OwnershipConflictError
from ...db.models.class_student_models import ClassGroup, Student, Subject
from ...db.models.record_models import AttendanceRecord, StudentScore


class BulkRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def _upsert(self, model, kind: str, record: Dict, mutable_fields: Iterable[str]):
        existing = self.db.get(model, record["id"])
        if existing is None:
            self.db.add(model(**record))
        elif existing.user_id != record["user_id"]:
            raise OwnershipConflictError(kind, record["id"])
        else:
            for field in mutable_fields:
                setattr(existing, field, record.get(field))
        self.db.flush()

    def upsert_class(self, record: Dict) -> None:
        self._upsert(ClassGroup, "class", record, ("name", "grade"))

    def upsert_student(self, record: Dict) -> None:
        self._upsert(Student, "student", record, ("name", "nis", "class_id"))

    def upsert_attendance(self, record: Dict) -> None:
        self._upsert(AttendanceRecord, "attendance", record, ("status",))

    def upsert_score(self, record: Dict) -> None:
        self._upsert(StudentScore, "score", record, ("score", "notes"))

    def insert_subject_if_absent(self, name: str, user_id: str) -> bool:
        exists = self.db.query(Subject.id).filter(Subject.name == name, Subject.user_id == user_id).first()
        if exists:
            return False
        self.db.add(Subject(name=name, user_id=user_id))
        self.db.flush()
        return True

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
