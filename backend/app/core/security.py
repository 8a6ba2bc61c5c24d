"""
security.py — Bearer Token Resolution (Identity Provider Seam)

Purpose:
- Turn an `Authorization: Bearer <token>` header into an AuthenticatedUser.
- Token issuing, password handling and sign-up all live in Supabase Auth;
  this backend only verifies.

Two ways to verify:
- JwtIdentityProvider: checks the Supabase-issued HS256 token locally with
  the project's JWT secret (no network call). Used when SUPABASE_JWT_SECRET
  is set.
- SupabaseIdentityProvider: asks Supabase Auth (`auth.get_user(token)`).

The resolved identity is passed explicitly into every service call; business
logic never reads ambient auth state.

This module does NOT:
- Decide ownership (see app/services/spots.py).
- Define API routes.
"""

from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Callable, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from supabase import AuthApiError, Client

from app.core.config import settings
from app.core.database import get_supabase_client
from app.core.errors import StoreUnavailable, Unauthenticated
from app.core.logging import get_logger
from app.models.user import AuthenticatedUser

logger = get_logger(__name__)

JWT_ALGORITHM = "HS256"

bearer_scheme = HTTPBearer(auto_error=False)


# -----------------------------------------------------------------------------
# Identity Providers
# -----------------------------------------------------------------------------

class IdentityProvider(ABC):
    """Resolves an opaque bearer token to a user, or raises Unauthenticated."""

    @abstractmethod
    def resolve(self, token: str) -> AuthenticatedUser:
        ...


class JwtIdentityProvider(IdentityProvider):
    def __init__(self, secret: str, audience: str = "authenticated"):
        self._secret = secret
        self._audience = audience

    def resolve(self, token: str) -> AuthenticatedUser:
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[JWT_ALGORITHM],
                audience=self._audience,
            )
        except JWTError as e:
            logger.info("Rejected bearer token: %s", e)
            raise Unauthenticated("Invalid token or user not found.") from e

        user_id = payload.get("sub")
        if not user_id:
            logger.info("Rejected bearer token without a subject claim")
            raise Unauthenticated("Invalid token or user not found.")
        return AuthenticatedUser(id=str(user_id), email=payload.get("email"))


class SupabaseIdentityProvider(IdentityProvider):
    """
    Verifies tokens against Supabase Auth.

    Takes a client factory so that a missing Supabase configuration only
    fails when a token actually has to be checked.
    """

    def __init__(self, client_factory: Callable[[], Client]):
        self._client_factory = client_factory

    def resolve(self, token: str) -> AuthenticatedUser:
        client = self._client_factory()
        try:
            response = client.auth.get_user(token)
        except AuthApiError as e:
            logger.info("Supabase Auth rejected bearer token: %s", e)
            raise Unauthenticated("Invalid token or user not found.") from e
        except Exception as e:
            logger.error("Supabase Auth lookup failed: %s", e)
            raise StoreUnavailable("Could not verify credentials.") from e

        user = response.user if response else None
        if user is None:
            logger.info("Supabase Auth returned no user for bearer token")
            raise Unauthenticated("Invalid token or user not found.")
        return AuthenticatedUser(id=str(user.id), email=user.email)


@lru_cache(maxsize=1)
def get_identity_provider() -> IdentityProvider:
    """FastAPI dependency; overridden in tests."""
    if settings.SUPABASE_JWT_SECRET:
        return JwtIdentityProvider(settings.SUPABASE_JWT_SECRET, settings.SUPABASE_JWT_AUDIENCE)
    return SupabaseIdentityProvider(get_supabase_client)


# -----------------------------------------------------------------------------
# Current User Dependencies
# -----------------------------------------------------------------------------

def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    provider: IdentityProvider = Depends(get_identity_provider),
) -> Optional[AuthenticatedUser]:
    """
    None when no bearer token was sent; a user when the token is valid.
    A token that is present but invalid is still a 401.
    """
    if credentials is None:
        return None
    return provider.resolve(credentials.credentials)


def get_current_user(
    user: Optional[AuthenticatedUser] = Depends(get_optional_user),
) -> AuthenticatedUser:
    """Authenticated caller, or 401."""
    if user is None:
        raise Unauthenticated("User not authenticated.")
    return user
