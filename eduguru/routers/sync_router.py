# /eduguru/routers/sync_router.py

from fastapi import APIRouter, Depends

from ..core.deps import CurrentUser, get_current_user, require_db
from ..models import import_model
from ..services import import_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter(dependencies=[Depends(require_db)])


@router.post("/master", response_model=import_model.MasterSyncResponse, summary="Upsert classes, students and subjects in one transaction")
def sync_master(
    request: import_model.MasterSyncRequest,
    current_user: CurrentUser = Depends(get_current_user),
    db: DatabaseService = Depends(get_db_service),
):
    counts, invalid = import_service.sync_master_data(request=request, db=db, user_id=current_user.id)
    return {"success": True, "imported": counts, "invalidClassRefs": invalid}
