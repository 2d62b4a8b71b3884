# /eduguru/routers/scores_router.py

from typing import List, Optional

from fastapi import APIRouter, Depends

from ..core.deps import CurrentUser, get_current_user, require_db
from ..models import import_model, score_model
from ..services import import_service, record_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter(dependencies=[Depends(require_db)])


@router.get("", response_model=List[score_model.StudentScore], summary="List scores")
def list_scores(
    classId: Optional[str] = None,
    subject: Optional[str] = None,
    type: Optional[score_model.AssessmentType] = None,
    current_user: CurrentUser = Depends(get_current_user),
    db: DatabaseService = Depends(get_db_service),
):
    return record_service.get_scores(db=db, user_id=current_user.id, class_id=classId, subject=subject, assessment_type=type)


@router.post("/bulk", response_model=import_model.BulkImportResponse, summary="Upsert a batch of scores")
def bulk_upsert_scores(
    request: score_model.ScoreBulkRequest,
    current_user: CurrentUser = Depends(get_current_user),
    db: DatabaseService = Depends(get_db_service),
):
    """Re-saving an existing score id only changes `score` and `notes`."""
    result = import_service.bulk_import_scores(request=request, db=db, user_id=current_user.id)
    return {"success": True, "imported": result.imported}
