import json
from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from langchain_core.language_models.fake_chat_models import FakeListChatModel
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import backend.models  # noqa: F401
from backend.api.deps import get_chat_model
from backend.database import Base, get_db
from backend.main import create_app
from backend.models import StudyBlock, Task

PASSWORD = "correct-horse"


class CountingChatModel(FakeListChatModel):
    """Fake chat model that remembers how often it was called"""
    calls: int = 0

    def _call(self, *args, **kwargs):
        self.calls += 1
        return super()._call(*args, **kwargs)


def plan_json(*tasks):
    return json.dumps({"tasks": list(tasks)})


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def fake_llm():
    return CountingChatModel(responses=["{}"])


@pytest.fixture
def app(session_factory, fake_llm):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app = create_app(create_tables=False)
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_chat_model] = lambda: fake_llm
    return app


@pytest.fixture
def make_client(app):
    """Factory returning a logged-in TestClient for the given email"""
    clients = []

    def _make(email="alice@example.com", name="Alice"):
        client = TestClient(app, raise_server_exceptions=False)
        clients.append(client)
        client.post("/api/auth/register", json={"email": email, "password": PASSWORD, "name": name})
        response = client.post("/api/auth/login", json={"email": email, "password": PASSWORD})
        assert response.status_code == 200
        client.user_id = response.json()["user"]["id"]
        return client

    yield _make
    for client in clients:
        client.close()


@pytest.fixture
def client(make_client):
    return make_client()


@pytest.fixture
def anon_client(app):
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c


@pytest.fixture
def block_payload():
    return {
        "title": "Linear Algebra midterm",
        "testDate": "2026-11-20",
        "hoursPerDay": 2,
        "selectedDays": ["mon", "wed", "fri"],
        "content": "Vectors, matrices, determinants, eigenvalues.",
    }


@pytest.fixture
def seed_block(db):
    """Insert a study block (and optional tasks) straight into the database"""
    def _seed(user_id, title="Seeded block", tasks=()):
        block = StudyBlock(
            user_id=user_id,
            title=title,
            start_date=datetime(2026, 10, 1),
            end_date=datetime(2026, 11, 30),
            total_hours=1.5,
            days_of_week=["tue", "thu"],
            content="Photosynthesis and cellular respiration.",
        )
        db.add(block)
        db.flush()
        for fields in tasks:
            db.add(Task(
                study_block_id=block.id,
                user_id=user_id,
                title=fields.get("title", "Task"),
                description=fields.get("description", ""),
                due_date=fields.get("due_date", datetime(2026, 10, 5)),
                task_type=fields.get("task_type", "learn"),
                completed=fields.get("completed", False),
                summary=fields.get("summary"),
                materials=fields.get("materials"),
            ))
        db.commit()
        db.refresh(block)
        return block

    return _seed


def set_responses(llm, *responses):
    """Queue raw LLM responses and restart the fake at the first one"""
    llm.responses = list(responses)
    llm.i = 0
