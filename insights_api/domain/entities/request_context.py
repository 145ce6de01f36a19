"""Identity of the caller a request is executed for."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RequestContext:
    """Organization scope and acting user resolved from the bearer token."""

    org_id: str
    user_id: str | None


__all__ = ["RequestContext"]
