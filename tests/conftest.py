from __future__ import annotations

from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from gobarber.auth import create_access_token
from gobarber.db import get_session
from gobarber.deps import get_clock
from gobarber.main import app
from gobarber.models import Appointment, File, User

# Frozen "now" shared by the tests: Sunday 2026-10-18 10:30 UTC.
NOW = datetime(2026, 10, 18, 10, 30)


class FrozenClock:
    def __init__(self, current: datetime) -> None:
        self.current = current

    def now(self) -> datetime:
        return self.current


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock(NOW)


def make_user(session: Session, name: str, *, provider: bool = False, avatar: File | None = None) -> User:
    user = User(
        name=name,
        email=f"{name.lower().replace(' ', '.')}@example.com",
        password_hash="not-a-real-hash",
        provider=provider,
        avatar=avatar,
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def make_appointment(
    session: Session,
    client: User,
    provider: User,
    date: datetime,
    canceled_at: datetime | None = None,
) -> Appointment:
    appointment = Appointment(user_id=client.id, provider_id=provider.id, date=date, canceled_at=canceled_at)
    session.add(appointment)
    session.commit()
    session.refresh(appointment)
    return appointment


@pytest.fixture
def provider(session) -> User:
    return make_user(session, "Carla Barber", provider=True)


@pytest.fixture
def client_user(session) -> User:
    return make_user(session, "John Client")


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token({'sub': str(user.id)})}"}


@pytest.fixture
def api(session, clock):
    # No context manager: the lifespan would create tables on the real database.
    app.dependency_overrides[get_session] = lambda: session
    app.dependency_overrides[get_clock] = lambda: clock
    yield TestClient(app)
    app.dependency_overrides.clear()
