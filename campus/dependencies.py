"""Reusable FastAPI dependencies for the Access Gate."""
from typing import Callable, Optional

from fastapi import Depends, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .auth import verify_credential
from .errors import Forbidden, Unauthenticated
from .models import RoleEnum
from .schemas import Principal

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
) -> Principal:
    if credentials is None or not credentials.credentials:
        raise Unauthenticated("Access token required")
    return verify_credential(credentials.credentials)


def allow_roles(*roles: RoleEnum) -> Callable[[Principal], Principal]:
    def dependency(current_user: Principal = Depends(get_current_principal)) -> Principal:
        if current_user.role not in roles:
            raise Forbidden("Admin access required" if roles == (RoleEnum.ADMIN,) else "Insufficient permissions")
        return current_user

    return dependency


require_admin = allow_roles(RoleEnum.ADMIN)
