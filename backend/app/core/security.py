from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

import jwt

from app.config import settings

ACCESS_TOKEN_EXPIRE_MINUTES = 60 * 24
WILDCARD = "*"


@dataclass(frozen=True)
class Caller:
    """The authenticated principal a request runs as."""

    user: str
    scopes: tuple[str, ...] = field(default_factory=tuple)

    def allows(self, resource: str, verb: str) -> bool:
        return any(scope_matches(s, resource, verb) for s in self.scopes)


def scope_matches(scope: str, resource: str, verb: str) -> bool:
    """Match a `<resource>:<verb>` scope, where either part may be `*`."""
    granted_resource, _, granted_verb = scope.strip().lower().partition(":")
    if not granted_resource:
        return False
    if granted_resource not in (WILDCARD, resource.lower()):
        return False
    # A bare resource grants every verb.
    if not granted_verb:
        return True
    return granted_verb in (WILDCARD, verb.lower())


def parse_scopes(claim) -> tuple[str, ...]:
    if not claim:
        return ()
    if isinstance(claim, str):
        return tuple(claim.split())
    return tuple(str(s) for s in claim)


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm="HS256")


def decode_access_token(token: str) -> dict | None:
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=["HS256"])
    except jwt.PyJWTError:
        return None


def builtin_caller() -> Caller:
    return Caller(user=settings.AUTH_BUILTIN_USER, scopes=(f"{WILDCARD}:{WILDCARD}",))
