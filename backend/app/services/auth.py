from sqlalchemy.orm import Session

from app.core.db import atomic
from app.core.errors import UnauthorizedError, ValidationError
from app.core.logger import Logger
from app.core.security import hash_password, verify_password
from app.models.admin import Admin

logger = Logger.get_logger(__name__)


def create_admin(db: Session, email: str, password: str) -> Admin:
    with atomic(db, "create admin"):
        admin = Admin(email=email.strip().lower(), hashed_password=hash_password(password))
        db.add(admin)
    return admin


def authenticate(db: Session, email: str, password: str) -> Admin:
    if not email or not password:
        raise ValidationError("Email and password are required.")

    admin = db.query(Admin).filter_by(email=email.strip().lower()).first()
    if not admin or not verify_password(admin.hashed_password, password):
        logger.warning(f"Failed login for {email!r}")
        raise UnauthorizedError("Invalid credentials.")

    return admin
