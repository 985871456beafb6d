"""
Fixtures do PDV: banco SQLite em memória, funcionário, catálogo e cliente HTTP.
"""
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from pdv.cart import Cart, CartStore
from pdv.database import Base, get_db
from pdv.main import app
from pdv.models import Customer, Product, Role, Service, User
from pdv.routers.pos import get_cart_store
from pdv.schemas.sales import CatalogEntry
from pdv.security import create_access_token


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def employee(db):
    user = User(
        username="caixa1",
        full_name="Ana Caixa",
        password_hash="not-used",
        role=Role.FUNCIONARIO,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def other_employee(db):
    user = User(username="caixa2", full_name="Bruno Caixa", password_hash="not-used")
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def product_a(db):
    product = Product(
        name="Cera líquida",
        sku="CERA500",
        current_stock=5,
        unit_price=Decimal("10.00"),
        cost_price=Decimal("6.00"),
    )
    db.add(product)
    db.commit()
    db.refresh(product)
    return product


@pytest.fixture
def product_out_of_stock(db):
    product = Product(
        name="Pretinho",
        sku="PNEU1L",
        current_stock=0,
        unit_price=Decimal("22.00"),
        cost_price=Decimal("9.50"),
    )
    db.add(product)
    db.commit()
    db.refresh(product)
    return product


@pytest.fixture
def service_b(db):
    service = Service(name="Lavagem simples", price=Decimal("25.00"), category="Lavagem", duration=30)
    db.add(service)
    db.commit()
    db.refresh(service)
    return service


@pytest.fixture
def customer(db):
    customer = Customer(name="Maria Souza", phone="(11) 98888-0001", email="maria@example.com")
    db.add(customer)
    db.commit()
    db.refresh(customer)
    return customer


@pytest.fixture
def scenario_cart(product_a, service_b):
    """Produto A 10.00 x 2 + serviço B 25.00 x 1."""
    cart = Cart()
    product_entry = CatalogEntry.from_product(product_a)
    cart.add_item(product_entry, "product")
    cart.add_item(product_entry, "product")
    cart.add_item(CatalogEntry.from_service(service_b), "service")
    return cart


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    store = CartStore()
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_cart_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(employee):
    token = create_access_token({"sub": employee.username})
    return {"Authorization": f"Bearer {token}"}
