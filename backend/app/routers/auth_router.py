from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.db import get_db
from app.core.logger import Logger
from app.core.security import TokenService
from app.routers.deps import get_token_service
from app.schemas.auth import LoginRequest, LoginResponse
from app.services.auth import authenticate

router = APIRouter()
logger = Logger.get_logger(__name__)


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    response: Response,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    admin = authenticate(db, body.email, body.password)
    token = tokens.issue(admin.id, admin.email)

    response.set_cookie(
        settings.AUTH_COOKIE_NAME,
        token,
        max_age=settings.JWT_EXPIRES_HOURS * 3600,
        httponly=True,
        samesite="lax",
    )
    logger.info(f"Admin {admin.id} logged in")
    return {"message": "Login successful", "token": token}
