"""Helpers for issuing and verifying the bearer tokens that carry the org scope."""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from insights_api.config import get_settings
from insights_api.domain.entities import RequestContext

ALGORITHM = "HS256"


def create_access_token(
    *,
    org_id: str,
    user_id: str | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Return a signed token scoping its bearer to ``org_id``."""

    settings = get_settings()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    claims: dict[str, object] = {"org_id": org_id, "exp": expire}
    if user_id is not None:
        claims["sub"] = user_id
    return jwt.encode(claims, settings.secret_key, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict:
    settings = get_settings()
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc


def resolve_request_context(token: str) -> RequestContext:
    """Decode ``token`` into the organization and user it was issued for.

    Raises ``ValueError`` when the token is invalid or carries no org scope.
    """

    payload = decode_access_token(token)
    org_id = payload.get("org_id")
    if not isinstance(org_id, str) or not org_id.strip():
        raise ValueError("Token does not carry an organization scope")
    user_id = payload.get("sub")
    return RequestContext(
        org_id=org_id.strip(),
        user_id=user_id if isinstance(user_id, str) and user_id else None,
    )


__all__ = [
    "ALGORITHM",
    "create_access_token",
    "decode_access_token",
    "resolve_request_context",
]
