"""Shared pytest fixtures."""

import mongomock
import pytest
from fastapi.testclient import TestClient

import main
from auth import create_access_token
from schemas import Product
from storage import Storage


@pytest.fixture
def db():
    """In-memory MongoDB database."""
    return mongomock.MongoClient()["farmaplus_test"]


@pytest.fixture
def storage(db):
    return Storage(db)


@pytest.fixture
def client(storage):
    """API client backed by the in-memory database."""
    main.app.dependency_overrides[main.get_storage] = lambda: storage
    yield TestClient(main.app)
    main.app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    token = create_access_token({"sub": "admin-1", "email": "admin@farmaplus.com"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def ibuprofen(storage):
    return storage.create_product(Product(
        name="Ibuprofeno 400mg",
        description="Analgésico y antiinflamatorio. 20 comprimidos.",
        price="8.50",
        category="Medicamentos",
        image_url="/img/ibuprofeno.png",
        stock=10,
    ))


@pytest.fixture
def vitamin_c(storage):
    return storage.create_product(Product(
        name="Vitamina C 1000mg",
        description="Suplemento para el sistema inmunológico.",
        price="24.99",
        category="Suplementos",
        image_url="/img/vitamina-c.png",
        stock=3,
    ))


@pytest.fixture
def order_payload(ibuprofen, vitamin_c):
    return {
        "customer_name": "Juan Pérez",
        "customer_email": "juan@example.com",
        "customer_phone": "+34 600 000 000",
        "delivery_address": "Calle Mayor 1",
        "delivery_city": "Madrid",
        "delivery_postal_code": "28013",
        "total": "41.99",
        "items": [
            {"product_id": ibuprofen["id"], "product_name": ibuprofen["name"], "quantity": 2, "price": "8.50"},
            {"product_id": vitamin_c["id"], "product_name": vitamin_c["name"], "quantity": 1, "price": "24.99"},
        ],
    }
