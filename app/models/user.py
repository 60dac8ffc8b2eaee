# app/models/user.py
from pydantic import BaseModel
from typing import Optional
from enum import Enum


class UserRole(str, Enum):
    """Rôles utilisateurs, du moins au plus privilégié"""
    USER = "user"
    HOST = "host"
    ADMIN = "admin"


ROLE_RANK = {UserRole.USER: 0, UserRole.HOST: 1, UserRole.ADMIN: 2}


class CurrentUser(BaseModel):
    """Utilisateur authentifié par Supabase Auth"""
    id: str
    email: Optional[str] = None
    role: UserRole = UserRole.USER

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def is_host(self) -> bool:
        return self.role in (UserRole.HOST, UserRole.ADMIN)
