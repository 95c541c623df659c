import logging

import socketio
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from visitdesk.api.routes import api_router
from visitdesk.core.config import get_settings
from visitdesk.core.exceptions import register_exception_handlers
from visitdesk.core.logging import setup_logging
from visitdesk.core.security import hash_password
from visitdesk.db.base import Base
from visitdesk.db.models import Employee, User, UserRole
from visitdesk.db.session import SessionLocal, engine
from visitdesk.middleware.request_context import RequestContextMiddleware
from visitdesk.socket.server import sio

settings = get_settings()
setup_logging(logging.DEBUG if settings.DEBUG else logging.INFO)
logger = logging.getLogger(__name__)

fastapi_app = FastAPI(title=settings.APP_NAME, debug=settings.DEBUG)
fastapi_app.include_router(api_router, prefix=settings.API_V1_PREFIX)
fastapi_app.add_middleware(RequestContextMiddleware)
fastapi_app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_origin_regex=settings.CORS_ALLOW_ORIGIN_REGEX,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_exception_handlers(fastapi_app)


def _seed_dev_data(db: Session):
    if db.query(User).count() > 0:
        return

    try:
        bob = Employee(name="Bob Martin", email="bob@visitdesk.example.com", department="Engineering")
        alice = Employee(name="Alice Chen", email="alice@visitdesk.example.com", department="People")
        db.add_all([bob, alice])
        db.flush()

        db.add_all(
            [
                User(
                    full_name="Demo Admin",
                    email="admin@visitdesk.example.com",
                    password_hash=hash_password("Password123!"),
                    role=UserRole.admin,
                ),
                User(
                    full_name="Demo Security",
                    email="security@visitdesk.example.com",
                    password_hash=hash_password("Password123!"),
                    role=UserRole.security,
                ),
                User(
                    full_name="Bob Martin",
                    email="bob@visitdesk.example.com",
                    password_hash=hash_password("Password123!"),
                    role=UserRole.employee,
                    employee_id=bob.id,
                ),
            ]
        )
        db.commit()
        logger.info("seeded development staff accounts and employees")
    except IntegrityError:
        # Another worker already inserted seed rows.
        db.rollback()


@fastapi_app.on_event("startup")
async def on_startup():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        if settings.ENVIRONMENT.lower() == "development":
            _seed_dev_data(db)
    finally:
        db.close()


app = socketio.ASGIApp(
    sio,
    other_asgi_app=fastapi_app,
    socketio_path=settings.SOCKET_PATH.lstrip("/"),
)
