# /eduguru/routers/attendance_router.py

import datetime as dt
from typing import List, Optional

from fastapi import APIRouter, Depends

from ..core.deps import CurrentUser, get_current_user, require_db
from ..models import attendance_model, import_model
from ..services import import_service, record_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter(dependencies=[Depends(require_db)])


@router.get("", response_model=List[attendance_model.AttendanceRecord], summary="List attendance records")
def list_attendance(
    classId: Optional[str] = None,
    date: Optional[dt.date] = None,
    subject: Optional[str] = None,
    current_user: CurrentUser = Depends(get_current_user),
    db: DatabaseService = Depends(get_db_service),
):
    return record_service.get_attendance(db=db, user_id=current_user.id, class_id=classId, date=date, subject=subject)


@router.post("/bulk", response_model=import_model.BulkImportResponse, summary="Upsert a batch of attendance records")
def bulk_upsert_attendance(
    request: attendance_model.AttendanceBulkRequest,
    current_user: CurrentUser = Depends(get_current_user),
    db: DatabaseService = Depends(get_db_service),
):
    """Records without an id are keyed by date, class, subject and student; re-saving only changes the status."""
    result = import_service.bulk_import_attendance(request=request, db=db, user_id=current_user.id)
    return {"success": True, "imported": result.imported}
