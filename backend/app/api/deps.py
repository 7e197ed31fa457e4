import logging

from fastapi import Depends, Header, Query, Request

from app.config import settings
from app.core.exceptions import AuthenticationError, AuthorizationError, BadRequestError
from app.core.pagination import Page, normalize_page
from app.core.security import Caller, builtin_caller, decode_access_token, parse_scopes

logger = logging.getLogger(__name__)


async def get_current_caller(authorization: str = Header(None)) -> Caller:
    """
    Resolve the caller from a Bearer JWT carrying `sub` and `scope` claims.
    With authentication disabled every request runs as the builtin user.
    """
    if not settings.AUTH_REQUIRED:
        return builtin_caller()

    if not authorization:
        raise AuthenticationError("Missing Authorization header")

    if not authorization.startswith("Bearer "):
        raise AuthenticationError("Invalid authorization format. Use: Bearer <token>")

    token = authorization[7:]  # Remove "Bearer "

    payload = decode_access_token(token)
    if not payload or not payload.get("sub"):
        raise AuthenticationError("Invalid or expired token")

    return Caller(user=str(payload["sub"]), scopes=parse_scopes(payload.get("scope")))


def require_scope(resource: str):
    """Build a dependency granting access when the caller holds `<resource>:<verb>`."""

    async def _check(request: Request, caller: Caller = Depends(get_current_caller)) -> Caller:
        verb = request.method.lower()
        if not caller.allows(resource, verb):
            logger.info(f"Denied {caller.user}: missing scope {resource}:{verb}")
            raise AuthorizationError(f"Missing scope: {resource}:{verb}")
        return caller

    return _check


async def get_page(
    offset: int | None = Query(None),
    limit: int | None = Query(None),
) -> Page:
    try:
        return normalize_page(
            offset=offset,
            limit=limit,
            default_limit=settings.PAGE_DEFAULT_LIMIT,
            max_limit=settings.PAGE_MAX_LIMIT,
        )
    except ValueError as e:
        raise BadRequestError(str(e))
