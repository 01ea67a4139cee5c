"""
FastAPI dependencies for authentication and authorization.

These dependencies are used to protect endpoints and turn the bearer token
into an explicit Principal that endpoints hand to the service layer.
"""

from typing import Callable, Optional
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.exceptions import ForbiddenError, UnauthenticatedError
from app.core.logging_config import bind_request_context
from app.core.permissions import Principal
from app.core.security import decode_token
from app.models.user import User, UserRole

# HTTP Bearer token scheme (Authorization: Bearer <token>); missing headers are
# reported by get_current_user so they map to 401 like any other bad token.
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> User:
    """
    Extract and validate the current user from JWT token.

    This dependency:
    1. Extracts the Bearer token from Authorization header
    2. Decodes and validates the JWT
    3. Fetches the user from the database
    4. Ensures the user is active

    Raises:
        UnauthenticatedError: If token is missing/invalid or user not found
        ForbiddenError: If the account is inactive
    """
    if credentials is None:
        raise UnauthenticatedError("Not authorized to access this route")

    try:
        payload = decode_token(credentials.credentials)
        user_id = UUID(payload.get("sub"))
    except (JWTError, TypeError, ValueError):
        raise UnauthenticatedError("Not authorized to access this route")

    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise UnauthenticatedError("User no longer exists")

    if not user.is_active:
        raise ForbiddenError("User account is inactive")

    return user


async def get_current_principal(user: User = Depends(get_current_user)) -> Principal:
    """Caller identity and role as a plain value for the service layer."""
    bind_request_context(principal_id=str(user.id))
    return Principal(id=user.id, role=user.role)


def require_role(*roles: UserRole) -> Callable:
    """
    Build a dependency that only admits callers holding one of `roles`.

    Usage:
        @router.post("/jobs")
        def create_job(principal: Principal = Depends(require_role(UserRole.EMPLOYER))):
            ...

    Raises:
        ForbiddenError: If the caller's role is not listed
    """
    async def dependency(principal: Principal = Depends(get_current_principal)) -> Principal:
        if principal.role not in roles:
            raise ForbiddenError(f"User role {principal.role.value} is not authorized to access this route")
        return principal

    return dependency


require_employer = require_role(UserRole.EMPLOYER)
require_jobseeker = require_role(UserRole.JOBSEEKER)
