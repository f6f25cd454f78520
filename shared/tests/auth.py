"""Helpers for authenticating API test clients."""

from __future__ import annotations

from uuid import UUID, uuid4

from rest_framework_simplejwt.tokens import AccessToken  # type: ignore


def bearer_token(subject: UUID | str | None = None) -> str:
    """Signed access token whose ``sub`` claim is the requester id."""
    token = AccessToken()
    token["sub"] = str(subject or uuid4())
    return f"Bearer {token}"
