# /eduguru/models/user_model.py

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Role = Literal["GURU", "WALI_KELAS", "BK", "ADMIN"]


class UserRegister(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    name: Optional[str] = None
    role: Optional[Role] = None


class UserLogin(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserProfileUpdate(BaseModel):
    """Partial profile update. A password change needs both password fields."""
    name: Optional[str] = None
    avatar: Optional[str] = None
    currentPassword: Optional[str] = None
    newPassword: Optional[str] = Field(default=None, min_length=1)


class UserPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    name: Optional[str] = None
    role: str
    avatar: Optional[str] = None


class AuthResponse(BaseModel):
    success: bool = True
    token: str
    user: UserPublic


class ProfileResponse(BaseModel):
    success: bool = True
    user: UserPublic


class TokenIdentity(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    role: str


class SessionStatus(BaseModel):
    authenticated: bool
    user: Optional[TokenIdentity] = None
