# /eduguru/services/import_service.py

"""
Facade over the bulk reconciliation helpers, used by the JSON bulk
endpoints, the master-data sync endpoint and the spreadsheet upload
endpoints. Routers hand over validated request models; everything below
this layer works on plain dictionaries.
"""

import asyncio
import logging
from typing import Dict, List, Tuple

from fastapi import UploadFile

from ..models import attendance_model, class_model, import_model, score_model, student_model, subject_model
from .database_service import DatabaseService
from .import_helpers import spreadsheet, upsert
from .import_helpers.upsert import BulkResult

logger = logging.getLogger(__name__)


def _dump(rows) -> List[Dict]:
    return [row.model_dump() for row in rows]


def bulk_import_classes(request: class_model.ClassBulkRequest, db: DatabaseService, user_id: str) -> BulkResult:
    return upsert.import_classes(db, _dump(request.classes), user_id)


def bulk_import_students(request: student_model.StudentBulkRequest, db: DatabaseService, user_id: str) -> BulkResult:
    return upsert.import_students(db, _dump(request.students), user_id, confirm=request.confirm)


def bulk_import_subjects(request: subject_model.SubjectBulkRequest, db: DatabaseService, user_id: str) -> BulkResult:
    return upsert.import_subjects(db, request.subjects, user_id)


def bulk_import_attendance(request: attendance_model.AttendanceBulkRequest, db: DatabaseService, user_id: str) -> BulkResult:
    return upsert.import_attendance(db, _dump(request.records), user_id)


def bulk_import_scores(request: score_model.ScoreBulkRequest, db: DatabaseService, user_id: str) -> BulkResult:
    return upsert.import_scores(db, _dump(request.scores), user_id)


def sync_master_data(request: import_model.MasterSyncRequest, db: DatabaseService, user_id: str) -> Tuple[Dict[str, int], int]:
    return upsert.sync_master_data(
        db,
        classes=_dump(request.classes),
        students=_dump(request.students),
        subjects=request.subjects,
        user_id=user_id,
    )


async def import_master_sheet(kind: str, file: UploadFile, db: DatabaseService, user_id: str, confirm: bool = False) -> BulkResult:
    """
    Parses an uploaded sheet and routes its rows through the same
    reconciliation path as the JSON endpoints.
    """
    file_bytes = await file.read()
    if not file_bytes:
        raise ValueError("The uploaded file is empty.")

    df = await asyncio.to_thread(spreadsheet.read_table, file_bytes, file.filename, file.content_type)
    logger.info("Parsed %d row(s) from '%s' for %s import", len(df), file.filename, kind)

    # The session is synchronous; keep the batch off the event loop.
    if kind == "classes":
        return await asyncio.to_thread(upsert.import_classes, db, spreadsheet.class_rows(df), user_id)
    if kind == "students":
        return await asyncio.to_thread(upsert.import_students, db, spreadsheet.student_rows(df), user_id, confirm=confirm)
    if kind == "subjects":
        return await asyncio.to_thread(upsert.import_subjects, db, spreadsheet.subject_rows(df), user_id)
    raise ValueError(f"Unknown import kind: {kind}")
