# /eduguru/routers/import_router.py

from typing import Literal

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status

from ..core.deps import CurrentUser, get_current_user, require_db
from ..models import import_model
from ..services import import_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter(dependencies=[Depends(require_db)])


@router.post("/{kind}", response_model=import_model.BulkImportResponse, summary="Import master data from a CSV or XLSX sheet")
async def import_sheet(
    kind: Literal["classes", "students", "subjects"],
    file: UploadFile = File(...),
    confirm: bool = Form(False),
    current_user: CurrentUser = Depends(get_current_user),
    db: DatabaseService = Depends(get_db_service),
):
    try:
        result = await import_service.import_master_sheet(kind, file, db=db, user_id=current_user.id, confirm=confirm)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return {"success": True, "imported": result.imported, "invalidClassRefs": result.invalid_class_refs}
