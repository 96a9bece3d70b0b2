import os
import sys
from datetime import datetime, timezone

import pytest

CURRENT_DIR = os.path.dirname(__file__)
SERVICE_ROOT = os.path.dirname(CURRENT_DIR)
if SERVICE_ROOT not in sys.path:
    sys.path.insert(0, SERVICE_ROOT)

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from attendance_service.infrastructure.db import get_db
from attendance_service.infrastructure.models import Base, ClassORM, StudentORM, UserORM
from attendance_service.infrastructure.ratelimit import limiter
from attendance_service.infrastructure.security import create_access_token, pwd
from attendance_service.main import app

# Одна БД в памяти на все соединения (запросы TestClient идут из других потоков)
test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

# Быстрые хэши для тестов: проверка пароля не зависит от числа раундов
fast_hasher = pwd.handler("bcrypt_sha256").using(rounds=4)

CLASSES = ["1-A", "1-B", "2-A", "2-B"]
STUDENTS = [
    ("Alice Johnson", 101, "1-A"),
    ("Bob Smith", 102, "1-A"),
    ("Carol Davis", 103, "1-A"),
    ("David Wilson", 104, "2-A"),
    ("Emma Brown", 105, "2-A"),
    ("Hemali", 109, "2-A"),
    ("Pruthvi", 106, "1-B"),
]
USERS = [
    {"name": "Mahipalsinh", "role": "teacher", "phone": "+911234567890", "registration_number": None, "password": "teacher123"},
    {"name": "ParentUser", "role": "parent", "phone": "+919876543210", "registration_number": None, "password": "parent123"},
    {"name": "StudentUser", "role": "student", "phone": None, "registration_number": "ST123", "password": "student123"},
]


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(autouse=True)
def disable_rate_limit():
    """Rate limiting в тестах отключен, кроме отдельного теста на лимит"""
    limiter.enabled = False
    yield
    limiter.enabled = True
    limiter.reset()


@pytest.fixture
def db():
    Base.metadata.drop_all(bind=test_engine)
    Base.metadata.create_all(bind=test_engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def seeded(db):
    """Классы, ученики и три пользователя с разными ролями"""
    db.add_all([ClassORM(name=name) for name in CLASSES])
    students = [StudentORM(name=n, roll=r, class_name=c) for n, r, c in STUDENTS]
    db.add_all(students)
    users = {}
    for u in USERS:
        row = UserORM(
            name=u["name"],
            role=u["role"],
            phone=u["phone"],
            registration_number=u["registration_number"],
            password_hash=fast_hasher.hash(u["password"]),
        )
        db.add(row)
        users[u["role"]] = row
    db.commit()
    return {
        "students": {s.name: s.id for s in students},
        "users": {role: row.id for role, row in users.items()},
    }


@pytest.fixture
def client(db):
    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    if get_db in app.dependency_overrides:
        del app.dependency_overrides[get_db]


def make_token(user_id: int, role: str, name: str = "Test", now: datetime | None = None) -> str:
    return create_access_token(user_id, role, name, now=now or datetime.now(timezone.utc))


@pytest.fixture
def auth_headers(seeded):
    """Заголовки Authorization для каждой роли"""
    names = {u["role"]: u["name"] for u in USERS}
    return {
        role: {"Authorization": f"Bearer {make_token(user_id, role, names[role])}"}
        for role, user_id in seeded["users"].items()
    }
