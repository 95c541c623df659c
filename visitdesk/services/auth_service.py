import hmac
import logging

from sqlalchemy.orm import Session

from visitdesk.core.config import get_settings
from visitdesk.core.exceptions import AppException
from visitdesk.core.security import (
    REFRESH_TOKEN,
    create_access_token,
    create_refresh_token,
    decode_token,
    hash_password,
    verify_password,
)
from visitdesk.db.models import Employee, User, UserRole
from visitdesk.schemas.auth import AuthResponse

settings = get_settings()
logger = logging.getLogger(__name__)


def serialize_user(user: User) -> dict:
    return {
        "id": user.id,
        "fullName": user.full_name,
        "email": user.email,
        "role": user.role.value,
        "employeeId": user.employee_id,
    }


def _issue_auth_tokens(user: User) -> AuthResponse:
    return AuthResponse(
        accessToken=create_access_token(user.id, user.role.value),
        refreshToken=create_refresh_token(user.id),
        user=serialize_user(user),
    )


def create_staff_user(
    db: Session,
    full_name: str,
    email: str,
    password: str,
    role: str,
    employee_id: str | None = None,
) -> User:
    email = email.strip().lower()
    if db.query(User).filter(User.email == email).first():
        raise AppException("Email already exists", status_code=409)

    try:
        user_role = UserRole(role)
    except ValueError as exc:
        raise AppException("Invalid role", status_code=400) from exc

    if employee_id:
        if user_role != UserRole.employee:
            raise AppException("Only employee accounts can be linked to an employee", status_code=400)
        if not db.query(Employee).filter(Employee.id == employee_id).first():
            raise AppException("Employee not found", status_code=404)

    user = User(
        full_name=full_name.strip(),
        email=email,
        password_hash=hash_password(password),
        role=user_role,
        employee_id=employee_id or None,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("staff user created user_id=%s role=%s", user.id, user.role.value)
    return user


def admin_signup(db: Session, full_name: str, email: str, password: str, signup_key: str) -> User:
    if not settings.ADMIN_SIGNUP_KEY:
        raise AppException("Admin signup is disabled", status_code=403)
    if not hmac.compare_digest(signup_key or "", settings.ADMIN_SIGNUP_KEY):
        raise AppException("Invalid admin signup key", status_code=403)
    return create_staff_user(db, full_name, email, password, UserRole.admin.value)


def login(db: Session, email: str, password: str) -> AuthResponse:
    user = db.query(User).filter(User.email == (email or "").strip().lower()).first()
    if not user or not verify_password(password, user.password_hash):
        raise AppException("Invalid credentials", status_code=401)
    if not user.is_active:
        raise AppException("Account is disabled", status_code=403)
    return _issue_auth_tokens(user)


def refresh(db: Session, refresh_token: str) -> AuthResponse:
    try:
        payload = decode_token(refresh_token, expected_type=REFRESH_TOKEN)
    except ValueError as exc:
        raise AppException("Invalid refresh token", status_code=401) from exc

    user = db.query(User).filter(User.id == payload.get("sub")).first()
    if not user or not user.is_active:
        raise AppException("Invalid refresh token", status_code=401)
    return _issue_auth_tokens(user)
