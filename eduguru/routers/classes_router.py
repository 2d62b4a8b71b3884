# /eduguru/routers/classes_router.py

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from ..core.deps import CurrentUser, get_current_user, require_db
from ..models import class_model, import_model
from ..services import class_service, import_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter(dependencies=[Depends(require_db)])


@router.get("", response_model=List[class_model.Class], summary="List classes with student counts")
def list_classes(current_user: CurrentUser = Depends(get_current_user), db: DatabaseService = Depends(get_db_service)):
    return class_service.get_all_classes_with_counts(db=db, user_id=current_user.id)


@router.post("", response_model=class_model.Class, status_code=status.HTTP_201_CREATED, summary="Create a class")
def create_class(
    class_data: class_model.ClassCreate,
    current_user: CurrentUser = Depends(get_current_user),
    db: DatabaseService = Depends(get_db_service),
):
    try:
        return class_service.create_class(class_data=class_data, db=db, user_id=current_user.id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.post("/bulk", response_model=import_model.BulkImportResponse, summary="Upsert a batch of classes")
def bulk_upsert_classes(
    request: class_model.ClassBulkRequest,
    current_user: CurrentUser = Depends(get_current_user),
    db: DatabaseService = Depends(get_db_service),
):
    result = import_service.bulk_import_classes(request=request, db=db, user_id=current_user.id)
    return {"success": True, "imported": result.imported}


@router.put("/{class_id}", response_model=class_model.Class, summary="Update a class")
def update_class(
    class_id: str,
    class_update: class_model.ClassUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    db: DatabaseService = Depends(get_db_service),
):
    updated = class_service.update_class(class_id=class_id, class_update=class_update, db=db, user_id=current_user.id)
    if updated is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Class with ID {class_id} not found")
    return updated


@router.delete("/{class_id}", summary="Delete a class (students are kept, unassigned)")
def delete_class(class_id: str, current_user: CurrentUser = Depends(get_current_user), db: DatabaseService = Depends(get_db_service)):
    if not class_service.delete_class(class_id=class_id, db=db, user_id=current_user.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Class with ID {class_id} not found")
    return {"success": True}


@router.delete("", summary="Delete every class, plus all journals")
def delete_all_classes(current_user: CurrentUser = Depends(get_current_user), db: DatabaseService = Depends(get_db_service)):
    deleted = class_service.delete_all_classes(db=db, user_id=current_user.id)
    return {"success": True, "deleted": deleted}
