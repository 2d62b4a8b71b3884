# /eduguru/services/import_helpers/upsert.py

"""
Bulk reconciliation: apply a batch of records of one kind as idempotent
upserts inside a single transaction.

Every public function here follows the same contract:

* An empty batch is a successful no-op that reports zero records.
* Rows are applied in input order. A row whose id already exists overwrites
  only the mutable fields for its kind (see `BulkRepositorySQL`); a repeated
  id later in the batch overwrites the earlier one.
* The batch commits as a whole or not at all. Any failure rolls back and is
  re-raised; database errors are wrapped in `ReconciliationError`.

Student batches additionally check each class code against the owner's
classes. What happens to unknown codes is governed by the
`invalid_class_policy` setting: 'confirm', 'clear' or 'reject'.
Attendance and score batches are refused outright when any row names a
student the importer does not own.
"""

import datetime as dt
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Set, Tuple

from ...core.config import settings
from ...core.errors import (
    ConfirmationRequiredError,
    EduGuruError,
    InvalidClassReferenceError,
    ReconciliationError,
    UnknownStudentReferenceError,
)
from ..database_service import DatabaseService
from . import record_ids

logger = logging.getLogger(__name__)


@dataclass
class BulkResult:
    imported: int = 0
    invalid_class_refs: int = 0


def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _as_date(value: Any) -> Optional[dt.date]:
    if value is None or value == "":
        return None
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    return dt.date.fromisoformat(str(value)[:10])


def _run_in_transaction(db: DatabaseService, kind: str, user_id: str, apply: Callable[[], BulkResult]) -> BulkResult:
    logger.info("Bulk %s import started for user %s", kind, user_id)
    try:
        result = apply()
        db.commit()
    except EduGuruError:
        db.rollback()
        logger.warning("Bulk %s import rolled back for user %s", kind, user_id, exc_info=True)
        raise
    except Exception as exc:
        db.rollback()
        logger.exception("Bulk %s import failed for user %s; transaction rolled back", kind, user_id)
        raise ReconciliationError(kind, str(exc)) from exc
    logger.info("Bulk %s import committed: %d record(s)", kind, result.imported)
    return result


# --- Row normalisation ---

def _class_record(row: Dict, user_id: str) -> Dict:
    return {
        "id": _clean(row.get("id")) or record_ids.generate_class_id(),
        "name": _clean(row.get("name")),
        "grade": row.get("grade"),
        "user_id": user_id,
    }


def _student_records(rows: Iterable[Dict], user_id: str, valid_class_ids: Set[str]) -> Tuple[List[Dict], int]:
    """Returns the prepared rows plus how many had an unknown, non-empty class code."""
    prepared, invalid = [], 0
    for row in rows:
        class_id = _clean(row.get("classId"))
        if class_id and class_id not in valid_class_ids:
            invalid += 1
            class_id = None
        prepared.append({
            "id": _clean(row.get("id")) or record_ids.generate_student_import_id(),
            "name": _clean(row.get("name")),
            "nis": _clean(row.get("nis")),
            "class_id": class_id,
            "user_id": user_id,
        })
    return prepared, invalid


def _attendance_record(row: Dict, user_id: str) -> Dict:
    date = _as_date(row.get("date"))
    return {
        "id": _clean(row.get("id")) or record_ids.attendance_record_id(
            date, row.get("classId"), row.get("subject"), row.get("studentId")
        ),
        "date": date,
        "student_id": row.get("studentId"),
        "class_id": row.get("classId"),
        "subject": row.get("subject"),
        "status": row.get("status"),
        "user_id": user_id,
    }


def _score_record(row: Dict, user_id: str) -> Dict:
    return {
        "id": _clean(row.get("id")) or record_ids.score_record_id(
            row.get("classId"), row.get("subject"), row.get("type"),
            row.get("assessmentTitle") or "", row.get("studentId"),
        ),
        "student_id": row.get("studentId"),
        "class_id": row.get("classId"),
        "subject": row.get("subject"),
        "type": row.get("type"),
        "score": row.get("score"),
        "assessment_title": row.get("assessmentTitle"),
        "date": _as_date(row.get("date")),
        "notes": row.get("notes"),
        "user_id": user_id,
    }


def subject_names(items: Iterable[Any]) -> List[str]:
    """Accepts bare strings or {'name': ...} objects; trims and drops blanks."""
    names = []
    for item in items:
        raw = item.get("name") if isinstance(item, dict) else item
        if not isinstance(raw, str):
            continue
        name = raw.strip()
        if name:
            names.append(name)
    return names


# --- Batch appliers (no commit) ---

def _apply_classes(db: DatabaseService, rows: List[Dict], user_id: str) -> int:
    for row in rows:
        db.upsert_class_pending(_class_record(row, user_id))
    return len(rows)


def _apply_students(db: DatabaseService, records: List[Dict]) -> int:
    for record in records:
        db.upsert_student_pending(record)
    return len(records)


def _apply_subjects(db: DatabaseService, names: List[str], user_id: str) -> int:
    for name in names:
        db.insert_subject_pending(name, user_id)
    return len(names)


def _check_student_refs(db: DatabaseService, rows: List[Dict], user_id: str, kind: str) -> None:
    """Records may only point at the importer's own students."""
    owned = db.get_student_ids(user_id)
    unknown = {row.get("studentId") for row in rows} - owned
    if unknown:
        logger.warning("Bulk %s import for user %s references %d unknown student(s)", kind, user_id, len(unknown))
        raise UnknownStudentReferenceError(kind, unknown)


# --- Public entry points ---

def import_classes(db: DatabaseService, rows: List[Dict], user_id: str) -> BulkResult:
    if not rows:
        return BulkResult()
    return _run_in_transaction(db, "class", user_id, lambda: BulkResult(imported=_apply_classes(db, rows, user_id)))


def import_students(
    db: DatabaseService,
    rows: List[Dict],
    user_id: str,
    confirm: bool = False,
    policy: Optional[str] = None,
) -> BulkResult:
    """
    Upserts students. Rows whose class code is unknown to the owner are
    handled per policy:

    - 'confirm': raise ConfirmationRequiredError unless `confirm` is set,
      then store them with no class.
    - 'clear': store them with no class straight away.
    - 'reject': raise InvalidClassReferenceError; nothing is written.

    In every case the number of such rows is reported back.
    """
    if not rows:
        return BulkResult()

    policy = policy or settings.invalid_class_policy
    records, invalid = _student_records(rows, user_id, db.get_class_ids(user_id))
    if invalid:
        logger.info("Student import for user %s has %d unknown class reference(s)", user_id, invalid)
        if policy == "reject":
            raise InvalidClassReferenceError(invalid)
        if policy == "confirm" and not confirm:
            raise ConfirmationRequiredError(invalid)

    return _run_in_transaction(
        db, "student", user_id,
        lambda: BulkResult(imported=_apply_students(db, records), invalid_class_refs=invalid),
    )


def import_subjects(db: DatabaseService, items: List[Any], user_id: str) -> BulkResult:
    names = subject_names(items)
    if not names:
        return BulkResult()
    return _run_in_transaction(db, "subject", user_id, lambda: BulkResult(imported=_apply_subjects(db, names, user_id)))


def import_attendance(db: DatabaseService, rows: List[Dict], user_id: str) -> BulkResult:
    if not rows:
        return BulkResult()

    def apply() -> BulkResult:
        _check_student_refs(db, rows, user_id, "attendance")
        for row in rows:
            db.upsert_attendance_pending(_attendance_record(row, user_id))
        return BulkResult(imported=len(rows))

    return _run_in_transaction(db, "attendance", user_id, apply)


def import_scores(db: DatabaseService, rows: List[Dict], user_id: str) -> BulkResult:
    if not rows:
        return BulkResult()

    def apply() -> BulkResult:
        _check_student_refs(db, rows, user_id, "score")
        for row in rows:
            db.upsert_score_pending(_score_record(row, user_id))
        return BulkResult(imported=len(rows))

    return _run_in_transaction(db, "score", user_id, apply)


def sync_master_data(
    db: DatabaseService,
    classes: List[Dict],
    students: List[Dict],
    subjects: List[Any],
    user_id: str,
) -> Tuple[Dict[str, int], int]:
    """
    Applies classes, then students, then subjects in one transaction.
    Student class codes may point at classes from the same payload. There is
    no confirmation step here: unknown codes are cleared and counted.
    """
    names = subject_names(subjects)
    counts = {"classes": 0, "students": 0, "subjects": 0}

    def apply() -> BulkResult:
        counts["classes"] = _apply_classes(db, classes, user_id)
        records, invalid = _student_records(students, user_id, db.get_class_ids(user_id))
        counts["students"] = _apply_students(db, records)
        counts["subjects"] = _apply_subjects(db, names, user_id)
        return BulkResult(imported=sum(counts.values()), invalid_class_refs=invalid)

    if not (classes or students or names):
        return counts, 0
    result = _run_in_transaction(db, "master", user_id, apply)
    return counts, result.invalid_class_refs
