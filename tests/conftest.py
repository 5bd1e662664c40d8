import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-with-enough-length-for-hs256")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from core.database import Base, get_db
from main import app
from models.card import Card, PokemonType

test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
    future=True,
)
TestSessionLocal = sessionmaker(bind=test_engine, autoflush=False, autocommit=False, future=True)

CARD_TYPES = [PokemonType.GRASS, PokemonType.FIRE, PokemonType.WATER, PokemonType.ELECTRIC]


@pytest.fixture
def db_session():
    """Fresh schema per test on a shared in-memory SQLite connection."""
    Base.metadata.create_all(bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def catalog(db_session) -> list[Card]:
    """Twelve cards inserted in reverse pokedex order."""
    cards = [
        Card(
            pokedex_number=number,
            name=f"Pokemon {number}",
            hp=40 + number,
            attack=30 + number,
            type=CARD_TYPES[number % len(CARD_TYPES)],
            img_url=f"pokemon-{number}.png",
        )
        for number in range(12, 0, -1)
    ]
    db_session.add_all(cards)
    db_session.commit()
    return sorted(cards, key=lambda card: card.pokedex_number)


@pytest.fixture
def card_ids(catalog) -> list[int]:
    return [card.id for card in catalog[:10]]


@pytest.fixture
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def sign_up(client):
    """Register an account through the API and return the response body."""

    def _sign_up(*, username: str, email: str, password: str = "pikachu123") -> dict:
        response = client.post(
            "/auth/sign-up",
            json={"username": username, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _sign_up


@pytest.fixture
def ash(sign_up) -> dict:
    return sign_up(username="ash", email="ash@pallet.town")


@pytest.fixture
def gary(sign_up) -> dict:
    return sign_up(username="gary", email="gary@pallet.town")


@pytest.fixture
def ash_headers(ash) -> dict:
    return {"Authorization": f"Bearer {ash['token']}"}


@pytest.fixture
def gary_headers(gary) -> dict:
    return {"Authorization": f"Bearer {gary['token']}"}
