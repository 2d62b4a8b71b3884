# /eduguru/routers/reports_router.py

from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import StreamingResponse

from ..core.deps import CurrentUser, get_current_user, require_db
from ..models import report_model
from ..services import recap_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter(dependencies=[Depends(require_db)])

Semester = Literal["ODD", "EVEN", "ALL"]


def _csv_response(csv_string: str, file_name: str) -> StreamingResponse:
    return StreamingResponse(iter([csv_string]), media_type="text/csv", headers={"Content-Disposition": f"attachment; filename={file_name}"})


def _attendance(db, user_id, classId, year, semester, months, subject):
    try:
        return recap_service.get_attendance_recap(
            db=db, user_id=user_id, class_id=classId, year=year, semester=semester, months=months, subject=subject
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


def _scores(db, user_id, classId, subject, year, semester, months):
    try:
        return recap_service.get_score_recap(
            db=db, user_id=user_id, class_id=classId, subject=subject, year=year, semester=semester, months=months
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/attendance", response_model=report_model.AttendanceRecap, summary="Attendance recap for a class")
def attendance_recap(
    classId: str,
    year: int,
    semester: Semester = "ALL",
    months: List[int] = Query(default=[]),
    subject: Optional[str] = None,
    current_user: CurrentUser = Depends(get_current_user),
    db: DatabaseService = Depends(get_db_service),
):
    return _attendance(db, current_user.id, classId, year, semester, months, subject)


@router.get("/attendance/export", summary="Attendance recap as CSV", response_class=StreamingResponse)
def attendance_recap_csv(
    classId: str,
    year: int,
    semester: Semester = "ALL",
    months: List[int] = Query(default=[]),
    subject: Optional[str] = None,
    current_user: CurrentUser = Depends(get_current_user),
    db: DatabaseService = Depends(get_db_service),
):
    recap = _attendance(db, current_user.id, classId, year, semester, months, subject)
    return _csv_response(recap_service.attendance_recap_to_csv(recap), f"rekap_absensi_{classId}_{year}.csv")


@router.get("/scores", response_model=report_model.ScoreRecap, summary="Score matrix (leger) for a class and subject")
def score_recap(
    classId: str,
    subject: str,
    year: int,
    semester: Semester = "ALL",
    months: List[int] = Query(default=[]),
    current_user: CurrentUser = Depends(get_current_user),
    db: DatabaseService = Depends(get_db_service),
):
    return _scores(db, current_user.id, classId, subject, year, semester, months)


@router.get("/scores/export", summary="Score matrix as CSV", response_class=StreamingResponse)
def score_recap_csv(
    classId: str,
    subject: str,
    year: int,
    semester: Semester = "ALL",
    months: List[int] = Query(default=[]),
    current_user: CurrentUser = Depends(get_current_user),
    db: DatabaseService = Depends(get_db_service),
):
    recap = _scores(db, current_user.id, classId, subject, year, semester, months)
    return _csv_response(recap_service.score_recap_to_csv(recap), f"leger_{classId}_{year}.csv")
