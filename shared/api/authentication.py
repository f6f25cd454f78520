"""Bearer token authentication for the booking API.

Tokens are issued elsewhere; this service only verifies the signature and
reads the requester id from the ``sub`` claim.
"""

from __future__ import annotations

from uuid import UUID

from rest_framework.exceptions import NotAuthenticated  # type: ignore
from rest_framework_simplejwt.authentication import JWTStatelessUserAuthentication  # type: ignore
from rest_framework_simplejwt.exceptions import InvalidToken  # type: ignore


class RequesterJWTAuthentication(JWTStatelessUserAuthentication):
    """Stateless JWT authentication that insists on a UUID subject."""

    def get_user(self, validated_token):
        user = super().get_user(validated_token)
        try:
            UUID(str(user.id))
        except ValueError:
            raise InvalidToken("Token subject is not a valid user id.")
        return user


def requester_id(request) -> UUID:
    """Requester id of an authenticated request."""
    user = getattr(request, "user", None)
    if user is None or not user.is_authenticated:
        raise NotAuthenticated()
    try:
        return UUID(str(user.id))
    except ValueError:
        raise NotAuthenticated("Token subject is not a valid user id.")
