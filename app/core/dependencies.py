"""FastAPI dependencies: database session, bearer authentication, services."""

from functools import lru_cache
from typing import Annotated, Any, Dict, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.exceptions import ForbiddenError, UnauthorizedError
from app.core.security import PasswordHasher
from app.db import ACTOR_KEY, get_db
from app.models.user import UserRole
from app.repositories import (
    DepartmentRepository,
    DependentRepository,
    EmployeeRepository,
    UserRepository,
)
from app.services import (
    AuthService,
    DepartmentService,
    DependentService,
    EmployeeService,
    TokenService,
)

bearer_scheme = HTTPBearer(auto_error=False)

DbSession = Annotated[AsyncSession, Depends(get_db)]


@lru_cache()
def get_token_service() -> TokenService:
    """Built once; raises ConfigurationError when the signing key is missing."""
    return TokenService(get_settings())


@lru_cache()
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(rounds=get_settings().bcrypt_rounds)


async def get_current_claims(
    db: DbSession,
    tokens: Annotated[TokenService, Depends(get_token_service)],
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Dict[str, Any]:
    """
    Validate the bearer access token statelessly and return its claims.

    The username is recorded on the session so the audit hook can stamp
    created_by / updated_by.
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise UnauthorizedError("Not authenticated")

    claims = tokens.validate_access_token(credentials.credentials)
    if not claims:
        raise UnauthorizedError("Invalid or expired token")

    username = claims.get("username")
    if username:
        db.info[ACTOR_KEY] = username
    return claims


CurrentClaims = Annotated[Dict[str, Any], Depends(get_current_claims)]


async def require_admin(claims: CurrentClaims) -> Dict[str, Any]:
    if claims.get("role") != UserRole.ADMIN.value:
        raise ForbiddenError("Admin role required")
    return claims


AdminClaims = Annotated[Dict[str, Any], Depends(require_admin)]


def get_auth_service(
    db: DbSession,
    tokens: Annotated[TokenService, Depends(get_token_service)],
    passwords: Annotated[PasswordHasher, Depends(get_password_hasher)],
) -> AuthService:
    return AuthService(UserRepository(db), tokens, passwords, get_settings())


def get_department_service(db: DbSession) -> DepartmentService:
    return DepartmentService(DepartmentRepository(db), EmployeeRepository(db))


def get_employee_service(db: DbSession) -> EmployeeService:
    return EmployeeService(EmployeeRepository(db), DepartmentRepository(db))


def get_dependent_service(db: DbSession) -> DependentService:
    return DependentService(DependentRepository(db), EmployeeRepository(db))


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
DepartmentServiceDep = Annotated[DepartmentService, Depends(get_department_service)]
EmployeeServiceDep = Annotated[EmployeeService, Depends(get_employee_service)]
DependentServiceDep = Annotated[DependentService, Depends(get_dependent_service)]
