# /eduguru/services/database_helpers/class_student_repository_sql.py

"""
Raw SQLAlchemy queries for the master data tables: classes, students and
subjects. Every method takes the owner's `user_id` and filters on it; this
is the last line of enforcement for data isolation between teachers.
"""

from typing import Dict, List, Optional, Set, Tuple

import pandas as pd
from sqlalchemy import select
from sqlalchemy.orm import Session

from ...db.models.class_student_models import ClassGroup, Student, Subject
from ...db.models.record_models import AttendanceRecord, CounselingSession, JournalEntry, StudentScore


class ClassStudentRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    # --- Class Methods ---

    def get_all_classes(self, user_id: str) -> List[ClassGroup]:
        return (
            self.db.query(ClassGroup)
            .filter(ClassGroup.user_id == user_id)
            .order_by(ClassGroup.grade, ClassGroup.name)
            .all()
        )

    def get_class_by_id(self, class_id: str, user_id: str) -> Optional[ClassGroup]:
        return self.db.query(ClassGroup).filter(ClassGroup.id == class_id, ClassGroup.user_id == user_id).first()

    def get_class_ids(self, user_id: str) -> Set[str]:
        rows = self.db.query(ClassGroup.id).filter(ClassGroup.user_id == user_id).all()
        return {row[0] for row in rows}

    def add_class(self, record: Dict) -> ClassGroup:
        new_class = ClassGroup(**record)
        self.db.add(new_class)
        self.db.commit()
        self.db.refresh(new_class)
        return new_class

    def update_class(self, class_id: str, user_id: str, data: Dict) -> Optional[ClassGroup]:
        db_class = self.get_class_by_id(class_id=class_id, user_id=user_id)
        if db_class:
            for key, value in data.items():
                setattr(db_class, key, value)
            self.db.commit()
            self.db.refresh(db_class)
        return db_class

    def delete_class(self, class_id: str, user_id: str) -> bool:
        """Deletes one class. Its students stay, with their class reference cleared."""
        db_class = self.get_class_by_id(class_id=class_id, user_id=user_id)
        if not db_class:
            return False
        self.db.query(Student).filter(Student.class_id == class_id).update(
            {Student.class_id: None}, synchronize_session=False
        )
        self.db.delete(db_class)
        self.db.commit()
        return True

    def delete_all_classes(self, user_id: str) -> int:
        """Removes the owner's journals, detaches all students, then drops every class."""
        self.db.query(JournalEntry).filter(JournalEntry.user_id == user_id).delete(synchronize_session=False)
        self.db.query(Student).filter(Student.user_id == user_id).update(
            {Student.class_id: None}, synchronize_session=False
        )
        deleted = self.db.query(ClassGroup).filter(ClassGroup.user_id == user_id).delete(synchronize_session=False)
        self.db.commit()
        return deleted

    # --- Student Methods ---

    def get_students(self, user_id: str, class_id: Optional[str] = None) -> List[Tuple[Student, Optional[str]]]:
        """Returns (student, class name) pairs ordered by student name."""
        query = (
            self.db.query(Student, ClassGroup.name)
            .outerjoin(ClassGroup, Student.class_id == ClassGroup.id)
            .filter(Student.user_id == user_id)
        )
        if class_id:
            query = query.filter(Student.class_id == class_id)
        return query.order_by(Student.name).all()

    def get_student_by_id(self, student_id: str, user_id: str) -> Optional[Student]:
        return self.db.query(Student).filter(Student.id == student_id, Student.user_id == user_id).first()

    def get_student_ids(self, user_id: str) -> Set[str]:
        rows = self.db.query(Student.id).filter(Student.user_id == user_id).all()
        return {row[0] for row in rows}

    def add_student(self, record: Dict) -> Student:
        new_student = Student(**record)
        self.db.add(new_student)
        self.db.commit()
        self.db.refresh(new_student)
        return new_student

    def update_student(self, student_id: str, user_id: str, data: Dict) -> Optional[Student]:
        db_student = self.get_student_by_id(student_id=student_id, user_id=user_id)
        if db_student:
            for key, value in data.items():
                setattr(db_student, key, value)
            self.db.commit()
            self.db.refresh(db_student)
        return db_student

    def _delete_student_records(self, student_ids) -> None:
        for model in (CounselingSession, StudentScore, AttendanceRecord):
            self.db.query(model).filter(model.student_id.in_(student_ids)).delete(synchronize_session=False)

    def delete_student(self, student_id: str, user_id: str) -> bool:
        """Deletes a student together with their counseling, score and attendance rows."""
        db_student = self.get_student_by_id(student_id=student_id, user_id=user_id)
        if not db_student:
            return False
        self._delete_student_records([student_id])
        self.db.delete(db_student)
        self.db.commit()
        return True

    def delete_all_students(self, user_id: str) -> int:
        self._delete_student_records(select(Student.id).where(Student.user_id == user_id))
        deleted = self.db.query(Student).filter(Student.user_id == user_id).delete(synchronize_session=False)
        self.db.commit()
        return deleted

    def get_students_as_dataframe(self, user_id: str) -> pd.DataFrame:
        rows = self.db.query(Student.id, Student.name, Student.nis, Student.class_id).filter(Student.user_id == user_id).all()
        return pd.DataFrame(rows, columns=["id", "name", "nis", "class_id"])

    # --- Subject Methods ---

    def get_subject_names(self, user_id: str) -> List[str]:
        rows = self.db.query(Subject.name).filter(Subject.user_id == user_id).order_by(Subject.name).all()
        return [row[0] for row in rows]

    def add_subject(self, name: str, user_id: str) -> bool:
        """Inserts the subject unless the owner already has it. Returns True when a row was added."""
        exists = self.db.query(Subject.id).filter(Subject.name == name, Subject.user_id == user_id).first()
        if exists:
            return False
        self.db.add(Subject(name=name, user_id=user_id))
        self.db.commit()
        return True

    def delete_subject(self, name: str, user_id: str) -> bool:
        deleted = self.db.query(Subject).filter(Subject.name == name, Subject.user_id == user_id).delete(synchronize_session=False)
        self.db.commit()
        return deleted > 0

    def delete_all_subjects(self, user_id: str) -> int:
        deleted = self.db.query(Subject).filter(Subject.user_id == user_id).delete(synchronize_session=False)
        self.db.commit()
        return deleted
