import os
from datetime import datetime, time, timedelta

import pytest

# Set testing environment before the application reads its settings
os.environ["TESTING"] = "1"
os.environ["TEST_DATABASE_URL"] = "sqlite:///./test.db"

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from hiv_treatment.main import app
from hiv_treatment.core.database import Base, get_db, get_redis
from hiv_treatment.core.security import (
    CallerContext, UserRole, create_user_token, get_password_hash
)
from hiv_treatment.models.doctor import Doctor, DoctorWorkSchedule
from hiv_treatment.models.patient import Patient
from hiv_treatment.models.user import Role, User

SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(
    SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False}
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    try:
        db = TestingSessionLocal()
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db

TEST_PASSWORD = "TestPassword123"

# user_id -> (email, role)
TEST_USERS = {
    "U001": ("admin@example.com", UserRole.ADMIN),
    "U002": ("manager@example.com", UserRole.MANAGER),
    "U003": ("doctor@example.com", UserRole.DOCTOR),
    "U004": ("staff@example.com", UserRole.STAFF),
    "U005": ("patient@example.com", UserRole.PATIENT),
    "U006": ("other.patient@example.com", UserRole.PATIENT),
    "U007": ("other.doctor@example.com", UserRole.DOCTOR),
}

TOMORROW = datetime.combine(datetime.now().date() + timedelta(days=1), time(9, 0))
DAY_AFTER_TOMORROW = TOMORROW + timedelta(days=1)
YESTERDAY = TOMORROW - timedelta(days=2)


def seed(db):
    """Roles, one account per role, two patients, two doctors and their working days."""
    for role in UserRole:
        db.add(Role(role_id=role.value, role_name=role.name.title()))

    password_hash = get_password_hash(TEST_PASSWORD)
    for user_id, (email, role) in TEST_USERS.items():
        db.add(User(
            user_id=user_id,
            fullname=f"Test {role.name.title()}",
            email=email,
            password_hash=password_hash,
            role_id=role.value
        ))

    db.add(Patient(patient_id="P001", user_id="U005", gender="Nam"))
    db.add(Patient(patient_id="P002", user_id="U006", gender="Nữ"))
    db.add(Doctor(doctor_id="D001", user_id="U003", specialization="HIV/AIDS"))
    db.add(Doctor(doctor_id="D002", user_id="U007", specialization="Nhiễm trùng"))

    db.add(DoctorWorkSchedule(schedule_id="S001", doctor_id="D001", slot_id="SL1",
                              date_work=datetime.combine(TOMORROW.date(), time.min)))
    db.add(DoctorWorkSchedule(schedule_id="S002", doctor_id="D001", slot_id="SL1",
                              date_work=datetime.combine(DAY_AFTER_TOMORROW.date(), time.min)))
    db.add(DoctorWorkSchedule(schedule_id="S003", doctor_id="D002", slot_id="SL2",
                              date_work=datetime.combine(TOMORROW.date(), time.min)))
    db.commit()


@pytest.fixture(scope="function")
def test_db():
    # Create tables
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    seed(db)
    db.close()
    get_redis().flushall()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db(test_db):
    session = TestingSessionLocal()
    yield session
    session.close()


@pytest.fixture
def client(test_db):
    with TestClient(app, base_url="http://testserver") as test_client:
        yield test_client


def caller(user_id: str) -> CallerContext:
    return CallerContext(user_id=user_id, role=TEST_USERS[user_id][1])


def auth_headers(user_id: str) -> dict:
    email, role = TEST_USERS[user_id]
    token = create_user_token(user_id, email, role)
    return {"Authorization": f"Bearer {token.access_token}"}


ADMIN = "U001"
MANAGER = "U002"
DOCTOR = "U003"
STAFF = "U004"
PATIENT = "U005"
OTHER_PATIENT = "U006"
OTHER_DOCTOR = "U007"
