# /eduguru/core/deps.py

"""
FastAPI dependencies shared by every router: the authenticated actor and
the database-availability gate.

The token gate never touches the database; the actor's identity comes
entirely from the signed JWT payload.
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Header, HTTPException, Request, status

from .security import AuthError, decode_access_token
from .state import AppState


@dataclass(frozen=True)
class CurrentUser:
    id: str
    username: str
    role: str


def _parse_token(auth_header: Optional[str]) -> Optional[str]:
    if not auth_header:
        return None
    parts = auth_header.split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1].strip():
        return None
    return parts[1].strip()


def _user_from_payload(payload: dict) -> CurrentUser:
    return CurrentUser(
        id=str(payload["id"]),
        username=payload["username"],
        role=payload.get("role", "GURU"),
    )


def get_current_user(
    authorization: Optional[str] = Header(default=None, alias="Authorization"),
) -> CurrentUser:
    token = _parse_token(authorization)
    if token is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")
    try:
        payload = decode_access_token(token)
    except AuthError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token") from exc
    return _user_from_payload(payload)


def get_optional_user(
    authorization: Optional[str] = Header(default=None, alias="Authorization"),
) -> Optional[CurrentUser]:
    """Same as `get_current_user`, but an absent or bad token yields None."""
    token = _parse_token(authorization)
    if token is None:
        return None
    try:
        return _user_from_payload(decode_access_token(token))
    except AuthError:
        return None


def get_app_state(request: Request) -> AppState:
    return getattr(request.app.state, "runtime", None) or AppState()


def require_db(state: AppState = Depends(get_app_state)) -> None:
    if not state.db_connected:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database not connected. The server is running in demo mode.",
        )
