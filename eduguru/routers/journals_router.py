# /eduguru/routers/journals_router.py

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from ..core.deps import CurrentUser, get_current_user, require_db
from ..models import journal_model
from ..services import record_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter(dependencies=[Depends(require_db)])


@router.get("", response_model=List[journal_model.JournalEntry], summary="List teaching journal entries, newest first")
def list_journals(current_user: CurrentUser = Depends(get_current_user), db: DatabaseService = Depends(get_db_service)):
    return record_service.get_journals(db=db, user_id=current_user.id)


@router.post("", response_model=journal_model.JournalEntry, summary="Create or overwrite a journal entry")
def save_journal(
    journal: journal_model.JournalSave,
    current_user: CurrentUser = Depends(get_current_user),
    db: DatabaseService = Depends(get_db_service),
):
    return record_service.save_journal(journal=journal, db=db, user_id=current_user.id)


@router.delete("/{journal_id}", summary="Delete a journal entry")
def delete_journal(journal_id: str, current_user: CurrentUser = Depends(get_current_user), db: DatabaseService = Depends(get_db_service)):
    if not record_service.delete_journal(journal_id=journal_id, db=db, user_id=current_user.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Journal with ID {journal_id} not found")
    return {"success": True}
