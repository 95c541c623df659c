from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from visitdesk.api.deps import get_current_user
from visitdesk.db.models import User
from visitdesk.db.session import get_db
from visitdesk.schemas.auth import AdminSignupRequest, LoginRequest, RefreshTokenRequest
from visitdesk.services import auth_service

router = APIRouter()


@router.post("/login")
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    data = auth_service.login(db=db, email=payload.email, password=payload.password)
    return {"data": data.model_dump()}


@router.post("/refresh-token")
def refresh_token(payload: RefreshTokenRequest, db: Session = Depends(get_db)):
    data = auth_service.refresh(db, payload.refreshToken)
    return {"data": data.model_dump()}


@router.post("/admin-signup")
def admin_signup(payload: AdminSignupRequest, db: Session = Depends(get_db)):
    user = auth_service.admin_signup(
        db=db,
        full_name=payload.fullName,
        email=payload.email,
        password=payload.password,
        signup_key=payload.signupKey,
    )
    return {"data": auth_service.serialize_user(user)}


@router.get("/me")
def me(user: User = Depends(get_current_user)):
    return {"data": auth_service.serialize_user(user)}
