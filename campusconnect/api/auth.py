"""
AuthGate - bearer token guard for protected routes.

get_current_account() is the single dependency every protected route
(account profile here, listings and uploads elsewhere) declares. It
resolves the Authorization: Bearer token to a live account and stores
the summary on request.state.account for downstream handlers.
require_admin() stacks on top of it for admin-only routes.
"""

import logging

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from campusconnect.adapters.tokens import InvalidToken, JwtTokenIssuer
from campusconnect.api.dependencies import get_repository, get_token_issuer
from campusconnect.domain.exceptions import Unauthorized
from campusconnect.domain.models import AccountSummary, Role
from campusconnect.domain.ports import AccountRepository

logger = logging.getLogger(__name__)

# auto_error=False so a missing header gets our 401, not FastAPI's 403
bearer_scheme = HTTPBearer(auto_error=False)


def authenticate(
    token: str | None, tokens: JwtTokenIssuer, repository: AccountRepository
) -> AccountSummary:
    """
    Resolve a raw bearer token to the account it was issued for.

    Raises:
        Unauthorized: Token missing, malformed, expired, or the account
            no longer exists
    """
    if not token:
        raise Unauthorized("Not authorized, no token")
    try:
        claims = tokens.decode(token)
    except InvalidToken as e:
        logger.debug("Rejected bearer token: %s", e)
        raise Unauthorized("Not authorized, token failed") from e

    account = repository.get_by_id(claims.account_id)
    if account is None:
        raise Unauthorized("Not authorized, user not found")
    return account.summary()


def get_current_account(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    tokens: JwtTokenIssuer = Depends(get_token_issuer),
    repository: AccountRepository = Depends(get_repository),
) -> AccountSummary:
    """FastAPI dependency: 401 unless the request carries a valid session token."""
    try:
        account = authenticate(
            credentials.credentials if credentials else None, tokens, repository
        )
    except Unauthorized as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        ) from None

    request.state.account = account
    return account


def require_admin(account: AccountSummary = Depends(get_current_account)) -> AccountSummary:
    """FastAPI dependency: 403 unless the authenticated account is an admin."""
    if account.role != Role.ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized as admin"
        )
    return account
