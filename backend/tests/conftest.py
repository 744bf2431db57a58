import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

import portal.models  # noqa: F401
from portal.auth import hash_password
from portal.database import get_session
from portal.main import app
from portal.models.user import User
from portal.services.user_repository import UserRepository

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "adminpass"
MODERATOR_USERNAME = "mod1"
MODERATOR_PASSWORD = "modpass"


@pytest.fixture(name="session")
def session_fixture():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine, expire_on_commit=False) as session:
        # Seed admin user
        UserRepository(session).create_admin(
            {
                "username": ADMIN_USERNAME,
                "password": hash_password(ADMIN_PASSWORD),
                "full_name": "Site Admin",
            }
        )
        yield session


@pytest.fixture(name="repo")
def repo_fixture(session: Session) -> UserRepository:
    return UserRepository(session)


@pytest.fixture(name="moderator")
def moderator_fixture(repo: UserRepository) -> User:
    return repo.create_moderator(
        {
            "username": MODERATOR_USERNAME,
            "password": hash_password(MODERATOR_PASSWORD),
            "full_name": "Mona Moderator",
            "badge_number": "B100",
            "department": "Support",
        }
    )


@pytest.fixture(name="client")
def client_fixture(session: Session):
    def get_session_override():
        yield session

    app.dependency_overrides[get_session] = get_session_override
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


def login(client: TestClient, username: str, password: str):
    return client.post(
        "/api/login",
        json={"username": username, "password": password},
    )


@pytest.fixture
def admin_client(client: TestClient) -> TestClient:
    assert login(client, ADMIN_USERNAME, ADMIN_PASSWORD).status_code == 200
    return client


@pytest.fixture
def moderator_client(client: TestClient, moderator: User) -> TestClient:
    assert login(client, MODERATOR_USERNAME, MODERATOR_PASSWORD).status_code == 200
    return client
