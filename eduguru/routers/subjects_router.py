# /eduguru/routers/subjects_router.py

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from ..core.deps import CurrentUser, get_current_user, require_db
from ..models import import_model, subject_model
from ..services import class_service, import_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter(dependencies=[Depends(require_db)])


@router.get("", response_model=List[str], summary="List subject names")
def list_subjects(current_user: CurrentUser = Depends(get_current_user), db: DatabaseService = Depends(get_db_service)):
    return class_service.get_subjects(db=db, user_id=current_user.id)


@router.post("", summary="Add a subject (duplicates are ignored)")
def create_subject(
    subject: subject_model.SubjectCreate,
    current_user: CurrentUser = Depends(get_current_user),
    db: DatabaseService = Depends(get_db_service),
):
    try:
        created = class_service.create_subject(name=subject.name, db=db, user_id=current_user.id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return {"success": True, "created": created}


@router.post("/bulk", response_model=import_model.BulkImportResponse, summary="Insert a batch of subjects")
def bulk_insert_subjects(
    request: subject_model.SubjectBulkRequest,
    current_user: CurrentUser = Depends(get_current_user),
    db: DatabaseService = Depends(get_db_service),
):
    result = import_service.bulk_import_subjects(request=request, db=db, user_id=current_user.id)
    return {"success": True, "imported": result.imported}


@router.delete("/{name}", summary="Delete a subject by name")
def delete_subject(name: str, current_user: CurrentUser = Depends(get_current_user), db: DatabaseService = Depends(get_db_service)):
    if not class_service.delete_subject(name=name, db=db, user_id=current_user.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Subject '{name}' not found")
    return {"success": True}


@router.delete("", summary="Delete every subject")
def delete_all_subjects(current_user: CurrentUser = Depends(get_current_user), db: DatabaseService = Depends(get_db_service)):
    deleted = class_service.delete_all_subjects(db=db, user_id=current_user.id)
    return {"success": True, "deleted": deleted}
