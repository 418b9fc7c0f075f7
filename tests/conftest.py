"""Shared test fixtures."""

from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

from family_calendar.core.database import get_session
from family_calendar.main import app
from family_calendar.models import Event, Family, Role, User, Visibility


@pytest.fixture(name="engine")
def engine_fixture():
    """Create an in-memory SQLite database for testing."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    """Create a new database session for each test."""
    with Session(engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(session: Session):
    """Create a test client with the test database session."""

    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture(name="family")
def family_fixture(session: Session) -> Family:
    family = Family(name="The Parkers")
    session.add(family)
    session.commit()
    session.refresh(family)
    return family


@pytest.fixture(name="other_family")
def other_family_fixture(session: Session) -> Family:
    family = Family(name="The Joneses")
    session.add(family)
    session.commit()
    session.refresh(family)
    return family


def _add_user(session: Session, email: str, name: str, role: Role, family: Family) -> User:
    user = User(email=email, name=name, role=role, family_id=family.id)
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture(name="admin")
def admin_fixture(session: Session, family: Family) -> User:
    """Family admin (A in the April scenario)."""
    return _add_user(session, "alex@example.com", "Alex", Role.ADMIN, family)


@pytest.fixture(name="adult")
def adult_fixture(session: Session, family: Family) -> User:
    """Second adult in the same family (B in the April scenario)."""
    return _add_user(session, "blair@example.com", "Blair", Role.ADULT, family)


@pytest.fixture(name="child")
def child_fixture(session: Session, family: Family) -> User:
    return _add_user(session, "casey@example.com", "Casey", Role.CHILD, family)


@pytest.fixture(name="outsider")
def outsider_fixture(session: Session, other_family: Family) -> User:
    """Admin of a different family."""
    return _add_user(session, "drew@example.com", "Drew", Role.ADMIN, other_family)


@pytest.fixture(name="event_factory")
def event_factory_fixture(session: Session):
    """Store an event owned by a given user, in that user's family."""

    def factory(owner: User, **values) -> Event:
        values.setdefault("title", "Family dinner")
        values.setdefault("date", date(2024, 4, 12))
        values.setdefault("visibility", Visibility.SHARED)
        event = Event.build(values, owner_id=owner.id, family_id=owner.family_id)
        session.add(event)
        session.commit()
        session.refresh(event)
        return event

    return factory

