# /eduguru/routers/students_router.py

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import StreamingResponse

from ..core.deps import CurrentUser, get_current_user, require_db
from ..models import import_model, student_model
from ..services import class_service, import_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter(dependencies=[Depends(require_db)])


@router.get("", response_model=List[student_model.Student], summary="List students")
def list_students(
    classId: Optional[str] = None,
    current_user: CurrentUser = Depends(get_current_user),
    db: DatabaseService = Depends(get_db_service),
):
    return class_service.get_students(db=db, user_id=current_user.id, class_id=classId)


@router.get("/export", summary="Export students as CSV", response_class=StreamingResponse)
def export_students(
    classId: Optional[str] = None,
    current_user: CurrentUser = Depends(get_current_user),
    db: DatabaseService = Depends(get_db_service),
):
    csv_string = class_service.export_students_as_csv(db=db, user_id=current_user.id, class_id=classId)
    file_name = f"students_{classId.lower()}.csv" if classId else "students.csv"
    return StreamingResponse(iter([csv_string]), media_type="text/csv", headers={"Content-Disposition": f"attachment; filename={file_name}"})


@router.post("", response_model=student_model.Student, status_code=status.HTTP_201_CREATED, summary="Create a student")
def create_student(
    student_data: student_model.StudentCreate,
    current_user: CurrentUser = Depends(get_current_user),
    db: DatabaseService = Depends(get_db_service),
):
    try:
        return class_service.create_student(student_data=student_data, db=db, user_id=current_user.id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.post("/bulk", response_model=import_model.BulkImportResponse, summary="Upsert a batch of students")
def bulk_upsert_students(
    request: student_model.StudentBulkRequest,
    current_user: CurrentUser = Depends(get_current_user),
    db: DatabaseService = Depends(get_db_service),
):
    """
    Unknown class codes follow the configured policy. In 'confirm' mode the
    first attempt answers 409 with `invalidCount`; resend with `confirm: true`
    to store those students without a class.
    """
    result = import_service.bulk_import_students(request=request, db=db, user_id=current_user.id)
    return {"success": True, "imported": result.imported, "invalidClassRefs": result.invalid_class_refs}


@router.put("/{student_id}", response_model=student_model.Student, summary="Update a student")
def update_student(
    student_id: str,
    student_update: student_model.StudentUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    db: DatabaseService = Depends(get_db_service),
):
    try:
        updated = class_service.update_student(student_id=student_id, student_update=student_update, db=db, user_id=current_user.id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if updated is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Student with ID {student_id} not found")
    return updated


@router.delete("/{student_id}", summary="Delete a student and their records")
def delete_student(student_id: str, current_user: CurrentUser = Depends(get_current_user), db: DatabaseService = Depends(get_db_service)):
    if not class_service.delete_student(student_id=student_id, db=db, user_id=current_user.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Student with ID {student_id} not found")
    return {"success": True}


@router.delete("", summary="Delete every student and their records")
def delete_all_students(current_user: CurrentUser = Depends(get_current_user), db: DatabaseService = Depends(get_db_service)):
    deleted = class_service.delete_all_students(db=db, user_id=current_user.id)
    return {"success": True, "deleted": deleted}
