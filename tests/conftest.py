"""Shared test fixtures: an in-memory database, services and sample rows."""

from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import get_db, init_db
from enums import AlbumFormat, AlbumGenre, HeadphoneType, NoiseCanceling, VinylRpm, VinylSize
from main import app
from models import OrderProduct
from order_service import OrderService
from product_service import AlbumService, HeadphoneService, ProductService, VinylService
from user_service import UserService
from wishlist_service import WishlistService


@pytest.fixture
def engine():
    """Fresh in-memory SQLite database with every table created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, expire_on_commit=False)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    """API client whose requests use the in-memory database."""

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def today():
    return date.today().strftime("%d%m%y")


# Services
@pytest.fixture
def users(db_session):
    return UserService(db_session)


@pytest.fixture
def orders(db_session):
    return OrderService(db_session)


@pytest.fixture
def albums(db_session):
    return AlbumService(db_session)


@pytest.fixture
def vinyls(db_session):
    return VinylService(db_session)


@pytest.fixture
def headphones(db_session):
    return HeadphoneService(db_session)


@pytest.fixture
def products(db_session):
    return ProductService(db_session)


@pytest.fixture
def wishlists(db_session):
    return WishlistService(db_session)


# Sample rows
@pytest.fixture
def juan(users):
    return users.create_user({
        "name": "Juan Perez",
        "email": "juanperez@gmail.com",
        "password": "juanperez",
        "phone": "5845464864",
        "address": "Callle 3ra #15",
    })


@pytest.fixture
def dark_side(albums):
    return albums.create({
        "name": "The Dark Side of the Moon",
        "price": 20.0,
        "stock": 10,
        "artist": "Pink Floyd",
        "year": 1973,
        "format": AlbumFormat.CD,
        "genre": AlbumGenre.ROCK,
        "duration": "43:00",
    })


@pytest.fixture
def thriller(albums):
    return albums.create({
        "name": "Thriller",
        "price": 25.0,
        "stock": 15,
        "artist": "Michael Jackson",
        "year": 1982,
        "format": AlbumFormat.DVD,
        "genre": AlbumGenre.POP,
        "duration": "42:19",
    })


@pytest.fixture
def lateralus(vinyls):
    return vinyls.create({
        "name": "Lateralus",
        "price": 29.99,
        "stock": 50,
        "artist": "Tool",
        "year": 2001,
        "format": AlbumFormat.LP,
        "genre": AlbumGenre.METAL,
        "duration": "78:00",
        "size": VinylSize.S_12,
        "rpm": VinylRpm.RPM_33,
        "color": "Black",
    })


@pytest.fixture
def wh1000(headphones):
    return headphones.create({
        "name": "WH-1000XM4",
        "price": 349.99,
        "stock": 200,
        "brand": "Sony",
        "color": "Black",
        "battery_life": 30,
        "warranty": 24,
        "wireless": True,
        "bluetooth": True,
        "headphone_type": HeadphoneType.OVER_EAR,
        "anc": NoiseCanceling.ACTIVE,
    })


@pytest.fixture
def juan_order(orders, juan, dark_side, thriller):
    """2 x 20.00 + 1 x 25.00 for Juan Perez."""
    return orders.create_order(juan, [
        OrderProduct(product=dark_side, quantity=2),
        OrderProduct(product=thriller, quantity=1),
    ])
