"""Schemas for provider callback endpoints."""

from .base import CamelModel


class SignatureCallbackResponse(CamelModel):
    ok: bool = True
    ignored: bool | None = None
    reason: str | None = None
