# /eduguru/routers/auth_router.py

import logging
from typing import Optional

import requests
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import RedirectResponse

from ..core.deps import CurrentUser, get_current_user, get_optional_user, require_db
from ..models import user_model
from ..services import oauth_service, user_service
from ..services.database_service import DatabaseService, get_db_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", response_model=user_model.AuthResponse, summary="Register a new account", dependencies=[Depends(require_db)])
def register(data: user_model.UserRegister, db: DatabaseService = Depends(get_db_service)):
    try:
        token, user = user_service.register_user(data=data, db=db)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return {"success": True, "token": token, "user": user}


@router.post("/login", response_model=user_model.AuthResponse, summary="Log in with username and password", dependencies=[Depends(require_db)])
def login(credentials: user_model.UserLogin, db: DatabaseService = Depends(get_db_service)):
    result = user_service.authenticate_user(credentials.username, credentials.password, db=db)
    if result is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=user_service.INVALID_CREDENTIALS)
    token, user = result
    return {"success": True, "token": token, "user": user}


@router.get("/me", response_model=user_model.UserPublic, summary="Get the current user's profile", dependencies=[Depends(require_db)])
def get_me(current_user: CurrentUser = Depends(get_current_user), db: DatabaseService = Depends(get_db_service)):
    profile = user_service.get_profile(current_user.id, db=db)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return profile


@router.put("/me", response_model=user_model.UserPublic, summary="Update profile or password", dependencies=[Depends(require_db)])
def update_me(
    update: user_model.UserProfileUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    db: DatabaseService = Depends(get_db_service),
):
    try:
        profile = user_service.update_profile(current_user.id, update, db=db)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return profile


@router.get("/session", response_model=user_model.SessionStatus, summary="Report whether the request carries a valid token")
def get_session(current_user: Optional[CurrentUser] = Depends(get_optional_user)):
    """An absent or stale token yields `authenticated: false`, never a 401."""
    return {"authenticated": current_user is not None, "user": current_user}


# --- OAuth ---

@router.get("/{provider}", summary="Start an OAuth login", response_class=RedirectResponse)
def oauth_start(provider: str):
    try:
        return RedirectResponse(oauth_service.build_authorize_url(provider))
    except KeyError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown OAuth provider '{provider}'")
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.get("/{provider}/callback", summary="OAuth callback", response_class=RedirectResponse, dependencies=[Depends(require_db)])
async def oauth_callback(provider: str, code: str = None, db: DatabaseService = Depends(get_db_service)):
    try:
        return RedirectResponse(await oauth_service.complete_login(provider, code, db=db))
    except KeyError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown OAuth provider '{provider}'")
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except requests.RequestException as e:
        logger.error("OAuth exchange with %s failed: %s", provider, e)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="OAuth provider request failed")
