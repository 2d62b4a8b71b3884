# /eduguru/services/user_service.py

"""
Account logic: registration, password login, profile maintenance and the
find-or-create step shared by every OAuth provider.
"""

import logging
from typing import Dict, Optional, Tuple
from urllib.parse import quote

from ..core.security import create_access_token, hash_password, verify_password
from ..models import user_model
from .database_service import DatabaseService
from .import_helpers import record_ids

logger = logging.getLogger(__name__)

OAUTH_PASSWORD_MARKER = "oauth_protected"
INVALID_CREDENTIALS = "Invalid username or password"


def avatar_url(name: str, background: str = "22c55e") -> str:
    return f"https://ui-avatars.com/api/?name={quote(name or '')}&background={background}&color=fff"


def serialize_user(user) -> Dict:
    return {"id": user.id, "username": user.username, "name": user.name, "role": user.role, "avatar": user.avatar}


def issue_token(user) -> str:
    return create_access_token(user_id=user.id, username=user.username, role=user.role)


def register_user(data: user_model.UserRegister, db: DatabaseService) -> Tuple[str, Dict]:
    if db.get_user_by_username(data.username):
        raise ValueError("Username already exists")

    display_name = data.name or data.username
    user = db.add_user({
        "id": record_ids.generate_id("user"),
        "username": data.username,
        "password": hash_password(data.password),
        "name": display_name,
        "role": data.role or "GURU",
        "avatar": avatar_url(display_name),
    })
    logger.info("Registered user %s", user.username)
    return issue_token(user), serialize_user(user)


def authenticate_user(username: str, password: str, db: DatabaseService) -> Optional[Tuple[str, Dict]]:
    """
    Returns (token, user) on success and None otherwise. Unknown usernames
    and wrong passwords are indistinguishable to the caller.
    """
    user = db.get_user_by_username(username)
    if not user or not verify_password(password, user.password):
        return None
    return issue_token(user), serialize_user(user)


def get_profile(user_id: str, db: DatabaseService) -> Optional[Dict]:
    user = db.get_user_by_id(user_id)
    return serialize_user(user) if user else None


def update_profile(user_id: str, update: user_model.UserProfileUpdate, db: DatabaseService) -> Optional[Dict]:
    user = db.get_user_by_id(user_id)
    if not user:
        return None

    data = {}
    if update.name:
        data["name"] = update.name
    if update.avatar:
        data["avatar"] = update.avatar
    if update.currentPassword and update.newPassword:
        if not verify_password(update.currentPassword, user.password):
            raise ValueError("Current password is incorrect")
        data["password"] = hash_password(update.newPassword)

    if not data:
        raise ValueError("No fields to update")
    return serialize_user(db.update_user(user_id, data))


def find_or_create_oauth_user(db: DatabaseService, email: str, name: Optional[str], avatar: Optional[str]):
    """OAuth accounts use the e-mail address as username and cannot log in with a password."""
    user = db.get_user_by_username(email)
    if user:
        return user
    logger.info("Creating account for first OAuth login of %s", email)
    return db.add_user({
        "id": record_ids.generate_id("user"),
        "username": email,
        "password": OAUTH_PASSWORD_MARKER,
        "name": name or email,
        "role": "GURU",
        "avatar": avatar or avatar_url(name or email),
    })
