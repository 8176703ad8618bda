from datetime import timedelta

import pytest
from jose import jwt

import auth
from auth import ALGORITHM, create_access_token

NEW_PRODUCT = {
    "name": "Paracetamol 500mg",
    "description": "Analgésico y antipirético. 30 comprimidos.",
    "price": 6.99,
    "category": "Medicamentos",
    "image_url": "/img/paracetamol.png",
    "image_urls": ["/img/paracetamol-2.png"],
    "stock": 220,
}


@pytest.mark.parametrize("method,path", [
    ("post", "/api/admin/products"),
    ("patch", "/api/admin/products/64b7f0c2a1b2c3d4e5f60718"),
    ("delete", "/api/admin/products/64b7f0c2a1b2c3d4e5f60718"),
])
def test_admin_routes_require_token(client, method, path):
    response = client.request(method.upper(), path, json=NEW_PRODUCT)

    assert response.status_code == 401
    assert response.json() == {"detail": "Not authenticated"}


def test_malformed_authorization_header(client):
    response = client.post("/api/admin/products", json=NEW_PRODUCT, headers={"Authorization": "Token abc"})

    assert response.status_code == 401


def test_expired_token_is_rejected(client):
    token = create_access_token({"sub": "admin-1"}, expires_delta=timedelta(seconds=-10))
    response = client.post("/api/admin/products", json=NEW_PRODUCT, headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json() == {"detail": "Invalid or expired token"}


def test_token_with_wrong_signature_is_rejected(client):
    token = jwt.encode({"sub": "admin-1"}, "some-other-secret", algorithm=ALGORITHM)
    response = client.delete("/api/admin/products/64b7f0c2a1b2c3d4e5f60718", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401


def test_create_product(client, admin_headers):
    response = client.post("/api/admin/products", json=NEW_PRODUCT, headers=admin_headers)

    assert response.status_code == 201
    product = response.json()
    assert product["price"] == "6.99"
    assert product["requires_prescription"] is False
    assert client.get(f"/api/products/{product['id']}").json()["name"] == "Paracetamol 500mg"


@pytest.mark.parametrize("change", [{"price": "abc"}, {"price": "1.999"}, {"stock": -1}, {"name": ""}])
def test_create_product_validation(client, admin_headers, change):
    response = client.post("/api/admin/products", json=dict(NEW_PRODUCT, **change), headers=admin_headers)

    assert response.status_code == 400


def test_update_product(client, admin_headers, ibuprofen):
    response = client.patch(f"/api/admin/products/{ibuprofen['id']}", json={"stock": 0, "price": "7.25"}, headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["stock"] == 0
    assert response.json()["price"] == "7.25"
    assert response.json()["category"] == "Medicamentos"


def test_update_product_without_fields(client, admin_headers, ibuprofen):
    response = client.patch(f"/api/admin/products/{ibuprofen['id']}", json={}, headers=admin_headers)

    assert response.status_code == 400


def test_update_missing_product(client, admin_headers):
    response = client.patch("/api/admin/products/64b7f0c2a1b2c3d4e5f60718", json={"stock": 1}, headers=admin_headers)

    assert response.status_code == 404


def test_delete_product(client, admin_headers, ibuprofen):
    response = client.delete(f"/api/admin/products/{ibuprofen['id']}", headers=admin_headers)

    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert client.get(f"/api/products/{ibuprofen['id']}").status_code == 404
    assert client.delete(f"/api/admin/products/{ibuprofen['id']}", headers=admin_headers).status_code == 404


# Login

@pytest.fixture
def local_admin(monkeypatch):
    monkeypatch.setattr(auth, "ADMIN_EMAIL", "admin@farmaplus.com")
    monkeypatch.setattr(auth, "ADMIN_PASSWORD_HASH", auth.hash_password("secreto123"))


def test_login_with_local_credentials(client, local_admin):
    response = client.post("/api/admin/login", json={"email": "Admin@FarmaPlus.com", "password": "secreto123"})

    assert response.status_code == 200
    claims = jwt.decode(response.json()["token"], auth.SECRET_KEY, algorithms=[ALGORITHM])
    assert claims["email"] == "admin@farmaplus.com"
    assert "exp" in claims


def test_login_token_grants_admin_access(client, local_admin):
    token = client.post("/api/admin/login", json={"email": "admin@farmaplus.com", "password": "secreto123"}).json()["token"]
    response = client.post("/api/admin/products", json=NEW_PRODUCT, headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 201


def test_login_with_wrong_password(client, local_admin):
    response = client.post("/api/admin/login", json={"email": "admin@farmaplus.com", "password": "incorrecta"})

    assert response.status_code == 401


def test_login_validation(client, local_admin):
    assert client.post("/api/admin/login", json={"email": "admin@farmaplus.com", "password": "123"}).status_code == 400
    assert client.post("/api/admin/login", json={"email": "nope", "password": "secreto123"}).status_code == 400
