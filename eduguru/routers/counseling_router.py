# /eduguru/routers/counseling_router.py

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from ..core.deps import CurrentUser, get_current_user, require_db
from ..models import counseling_model
from ..services import record_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter(dependencies=[Depends(require_db)])


@router.get("", response_model=List[counseling_model.CounselingSession], summary="List counseling sessions")
def list_counseling(
    studentId: Optional[str] = None,
    current_user: CurrentUser = Depends(get_current_user),
    db: DatabaseService = Depends(get_db_service),
):
    return record_service.get_counseling_sessions(db=db, user_id=current_user.id, student_id=studentId)


@router.post("", response_model=counseling_model.CounselingSession, summary="Create or update a counseling session")
def save_counseling(
    session: counseling_model.CounselingSave,
    current_user: CurrentUser = Depends(get_current_user),
    db: DatabaseService = Depends(get_db_service),
):
    try:
        return record_service.save_counseling(session=session, db=db, user_id=current_user.id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete("/{session_id}", summary="Delete a counseling session")
def delete_counseling(session_id: str, current_user: CurrentUser = Depends(get_current_user), db: DatabaseService = Depends(get_db_service)):
    if not record_service.delete_counseling(session_id=session_id, db=db, user_id=current_user.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Counseling session {session_id} not found")
    return {"success": True}
