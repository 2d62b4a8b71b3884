# /eduguru/routers/dashboard_router.py

from fastapi import APIRouter, Depends

from ..core.deps import CurrentUser, get_current_user, require_db
from ..models.dashboard_model import DashboardStats
from ..services import dashboard_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter(dependencies=[Depends(require_db)])


@router.get(
    "/stats",
    response_model=DashboardStats,
    summary="Get Dashboard Stats",
    description="Headline counts for the home screen plus the five most recent journal entries.",
)
def get_dashboard_stats(current_user: CurrentUser = Depends(get_current_user), db: DatabaseService = Depends(get_db_service)):
    return dashboard_service.get_stats(db=db, user_id=current_user.id)
