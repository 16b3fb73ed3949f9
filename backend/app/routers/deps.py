from functools import lru_cache

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.config import settings
from app.core.errors import UnauthorizedError
from app.core.security import Identity, TokenService, build_token_service

bearer = HTTPBearer(auto_error=False)


@lru_cache
def get_token_service() -> TokenService:
    return build_token_service()


def require_admin(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
    tokens: TokenService = Depends(get_token_service),
) -> Identity:
    # header wins over cookie
    token = credentials.credentials if credentials else request.cookies.get(settings.AUTH_COOKIE_NAME)
    if not token:
        raise UnauthorizedError("Unauthorized: No token provided.")
    return tokens.verify(token)
