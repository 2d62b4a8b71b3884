# /eduguru/services/class_service.py

"""
Business logic for the master data screens: classes, students and
subjects.

Each function stamps or checks the owner's `user_id` before delegating to
the `DatabaseService`, and converts ORM rows into the camelCase shapes the
API returns.
"""

import logging
from typing import Dict, List, Optional

import pandas as pd

from ..models import class_model, student_model
from .database_service import DatabaseService
from .import_helpers import record_ids

logger = logging.getLogger(__name__)


def serialize_class(db_class, student_count: int = 0) -> Dict:
    return {"id": db_class.id, "name": db_class.name, "grade": db_class.grade, "studentCount": student_count}


def serialize_student(student, class_name: Optional[str] = None) -> Dict:
    return {
        "id": student.id,
        "name": student.name,
        "nis": student.nis,
        "classId": student.class_id,
        "className": class_name,
    }


def _ensure_class_owned(class_id: Optional[str], db: DatabaseService, user_id: str) -> Optional[str]:
    if not class_id:
        return None
    if not db.get_class_by_id(class_id=class_id, user_id=user_id):
        raise ValueError(f"Class with ID {class_id} not found")
    return class_id


# --- Classes ---

def get_all_classes_with_counts(db: DatabaseService, user_id: str) -> List[Dict]:
    """Lists the owner's classes (ordered by grade, then name) with their student counts."""
    classes = db.get_all_classes(user_id=user_id)
    if not classes:
        return []

    students_df = db.get_students_as_dataframe(user_id=user_id)
    counts = {}
    if not students_df.empty:
        counts = students_df.dropna(subset=["class_id"]).groupby("class_id").size().to_dict()

    return [serialize_class(c, int(counts.get(c.id, 0))) for c in classes]


def create_class(class_data: class_model.ClassCreate, db: DatabaseService, user_id: str) -> Dict:
    class_id = class_data.id or record_ids.generate_class_id()
    if db.get_class_by_id(class_id=class_id, user_id=user_id):
        raise ValueError(f"Class with ID {class_id} already exists")
    record = {"id": class_id, "name": class_data.name.strip(), "grade": class_data.grade, "user_id": user_id}
    return serialize_class(db.add_class(record))


def update_class(class_id: str, class_update: class_model.ClassUpdate, db: DatabaseService, user_id: str) -> Optional[Dict]:
    data = class_update.model_dump(exclude_unset=True)
    updated = db.update_class(class_id=class_id, user_id=user_id, data=data)
    return serialize_class(updated) if updated else None


def delete_class(class_id: str, db: DatabaseService, user_id: str) -> bool:
    was_deleted = db.delete_class(class_id=class_id, user_id=user_id)
    if was_deleted:
        logger.info("Class %s deleted by user %s; its students were detached", class_id, user_id)
    return was_deleted


def delete_all_classes(db: DatabaseService, user_id: str) -> int:
    return db.delete_all_classes(user_id=user_id)


# --- Students ---

def get_students(db: DatabaseService, user_id: str, class_id: Optional[str] = None) -> List[Dict]:
    return [serialize_student(s, class_name) for s, class_name in db.get_students(user_id=user_id, class_id=class_id)]


def create_student(student_data: student_model.StudentCreate, db: DatabaseService, user_id: str) -> Dict:
    record = {
        "id": student_data.id or record_ids.generate_id("std"),
        "name": student_data.name.strip(),
        "nis": student_data.nis,
        "class_id": _ensure_class_owned(student_data.classId, db, user_id),
        "user_id": user_id,
    }
    if db.get_student_by_id(student_id=record["id"], user_id=user_id):
        raise ValueError(f"Student with ID {record['id']} already exists")
    return serialize_student(db.add_student(record))


def update_student(student_id: str, student_update: student_model.StudentUpdate, db: DatabaseService, user_id: str) -> Optional[Dict]:
    payload = student_update.model_dump(exclude_unset=True)
    data = {key: payload[key] for key in ("name", "nis") if key in payload}
    if "classId" in payload:
        data["class_id"] = _ensure_class_owned(payload["classId"], db, user_id)
    updated = db.update_student(student_id=student_id, user_id=user_id, data=data)
    return serialize_student(updated) if updated else None


def delete_student(student_id: str, db: DatabaseService, user_id: str) -> bool:
    return db.delete_student(student_id=student_id, user_id=user_id)


def delete_all_students(db: DatabaseService, user_id: str) -> int:
    return db.delete_all_students(user_id=user_id)


def export_students_as_csv(db: DatabaseService, user_id: str, class_id: Optional[str] = None) -> str:
    """Exports the roster with the same headers the import template uses."""
    students = get_students(db=db, user_id=user_id, class_id=class_id)
    df = pd.DataFrame(students, columns=["id", "name", "nis", "classId"])
    df = df.rename(columns={"id": "ID", "name": "Nama", "nis": "NIS", "classId": "KodeKelas"})
    return df.to_csv(index=False)


# --- Subjects ---

def get_subjects(db: DatabaseService, user_id: str) -> List[str]:
    return db.get_subject_names(user_id=user_id)


def create_subject(name: str, db: DatabaseService, user_id: str) -> bool:
    name = name.strip()
    if not name:
        raise ValueError("Subject name cannot be empty")
    return db.add_subject(name=name, user_id=user_id)


def delete_subject(name: str, db: DatabaseService, user_id: str) -> bool:
    return db.delete_subject(name=name, user_id=user_id)


def delete_all_subjects(db: DatabaseService, user_id: str) -> int:
    return db.delete_all_subjects(user_id=user_id)
