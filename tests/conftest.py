import json

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine
from database import get_session
from main import app
from helpers.auth import hash_password
from helpers.tokens import issue, verify
from models.user import User
from settings import get_settings


@pytest.fixture(name="session")
def session_fixture():
    # One shared connection so the TestClient thread sees the same in-memory db
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="client")
def client_fixture(session: Session):
    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def media_root(tmp_path, monkeypatch):
    """Keep uploaded files inside the test's temporary directory."""
    monkeypatch.setattr(get_settings(), "media_root", str(tmp_path))
    return tmp_path


@pytest.fixture(name="make_user")
def make_user_fixture(session: Session):
    def make_user(username: str, email: str = None, password: str = "secret1") -> User:
        user = User(
            username=username,
            email=email or f"{username}@x.com",
            hashed_password=hash_password(password)
        )
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    return make_user


@pytest.fixture(name="auth_headers")
def auth_headers_fixture():
    def auth_headers(user: User) -> dict:
        return {"Authorization": f"Bearer {issue(user.id, user.username)}"}

    return auth_headers


@pytest.fixture(name="claim_for")
def claim_for_fixture():
    def claim_for(user: User):
        return verify(issue(user.id, user.username))

    return claim_for


class FakeWebSocket:
    """Stands in for a WebSocket; records decoded frames it was sent."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.accepted = False
        self.sent = []

    async def accept(self):
        self.accepted = True

    async def send_text(self, text: str):
        if self.fail:
            raise RuntimeError("connection closed")
        self.sent.append(json.loads(text))

    def events(self):
        return [frame["event"] for frame in self.sent]


@pytest.fixture(name="make_socket")
def make_socket_fixture():
    return FakeWebSocket
