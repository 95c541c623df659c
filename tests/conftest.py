import os

os.environ["ENVIRONMENT"] = "test"
os.environ["DEBUG"] = "false"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret"
os.environ["ADMIN_SIGNUP_KEY"] = "bootstrap-key"

from datetime import date, time  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from visitdesk.core.security import create_access_token, hash_password  # noqa: E402
from visitdesk.db.base import Base  # noqa: E402
from visitdesk.db.models import Appointment, AppointmentStatus, Employee, User, UserRole, Visitor  # noqa: E402
from visitdesk.db.session import enable_sqlite_foreign_keys, get_db  # noqa: E402
from visitdesk.main import fastapi_app  # noqa: E402
from visitdesk.services.visitor_service import generate_visitor_id  # noqa: E402

PASSWORD = "Password123!"

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_foreign_keys(engine)
TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    fastapi_app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(fastapi_app)
    finally:
        fastapi_app.dependency_overrides.clear()


def make_user(db, role: UserRole, email: str, employee_id: str | None = None) -> User:
    user = User(
        full_name=f"Test {role.value.title()}",
        email=email,
        password_hash=hash_password(PASSWORD),
        role=role,
        employee_id=employee_id,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id, user.role.value)}"}


@pytest.fixture
def employee(db) -> Employee:
    row = Employee(name="Bob", email="bob@example.com", department="Engineering")
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


@pytest.fixture
def admin(db) -> User:
    return make_user(db, UserRole.admin, "admin@example.com")


@pytest.fixture
def guard(db) -> User:
    return make_user(db, UserRole.security, "guard@example.com")


@pytest.fixture
def make_appointment(db, employee):
    """Insert a visitor plus one appointment in the given state without going through the API."""

    def factory(
        status: AppointmentStatus = AppointmentStatus.pending,
        visitor: Visitor | None = None,
        visit_date: date = date(2025, 1, 10),
        visit_time: time = time(10, 0),
    ) -> Appointment:
        if visitor is None:
            visitor = Visitor(
                visitor_id=generate_visitor_id(),
                name="Jane Doe",
                email="jane@example.com",
                phone="555-0100",
            )
            db.add(visitor)
            db.flush()
        appointment = Appointment(
            visitor_id=visitor.id,
            employee_id=employee.id,
            purpose="Interview",
            visit_date=visit_date,
            visit_time=visit_time,
            status=status,
        )
        db.add(appointment)
        db.commit()
        db.refresh(appointment)
        return appointment

    return factory
