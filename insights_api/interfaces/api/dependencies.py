"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from insights_api.domain.entities import RequestContext
from insights_api.infrastructure.database import get_db, get_session_factory
from insights_api.infrastructure.security import resolve_request_context

bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_request_context(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> RequestContext:
    """Return the organization and user the bearer token was issued for."""

    if credentials is None or not credentials.credentials:
        raise _unauthorized("Not authenticated")
    try:
        return resolve_request_context(credentials.credentials)
    except ValueError as exc:
        raise _unauthorized("Invalid credentials") from exc


__all__ = ["bearer_scheme", "get_db", "get_request_context", "get_session_factory"]
