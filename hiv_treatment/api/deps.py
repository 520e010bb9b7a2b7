from fastapi import Depends, HTTPException, status, Request
from fastapi.security import HTTPAuthorizationCredentials
from typing import Optional

from ..core.config import settings
from ..core.database import get_redis
from ..core.security import (
    security, verify_token, AuthenticationError,
    AuthorizationError, CallerContext, UserRole
)


async def get_current_caller(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> CallerContext:
    """Build the caller context from the bearer token's sub and role claims."""
    if credentials is None:
        raise AuthenticationError("Not authenticated")

    token_payload = verify_token(credentials.credentials)
    if not token_payload:
        raise AuthenticationError("Invalid or expired token")

    if token_payload.token_type != "access":
        raise AuthenticationError("Invalid token type")

    role = UserRole.parse(token_payload.role)
    if not token_payload.sub or role is None:
        raise AuthenticationError("Invalid token payload")

    return CallerContext(user_id=token_payload.sub, role=role)


# Role-based access control dependencies
def require_role(*allowed_roles: UserRole):
    """Create a dependency that admits only callers holding one of ``allowed_roles``."""
    async def role_checker(
        caller: CallerContext = Depends(get_current_caller)
    ) -> CallerContext:
        if not caller.has_role(*allowed_roles):
            raise AuthorizationError(
                f"Access denied. Required roles: {[role.value for role in allowed_roles]}"
            )
        return caller

    return role_checker


# Rate limiting dependency
async def rate_limit_check(
    request: Request,
    redis_client=Depends(get_redis)
) -> None:
    """Limit login attempts per client address."""
    client_ip = request.client.host if request.client else "unknown"
    key = f"rate_limit:login:{client_ip}"

    current_requests = redis_client.get(key)
    if current_requests is None:
        redis_client.setex(key, settings.LOGIN_RATE_WINDOW_SECONDS, 1)
    else:
        if int(current_requests) >= settings.LOGIN_RATE_LIMIT:
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                detail="Too many requests. Please try again later."
            )
        redis_client.incr(key)
