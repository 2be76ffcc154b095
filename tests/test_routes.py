import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from addressbook import auth
from addressbook.auth import create_access_token
from addressbook.db import Base, get_db
from addressbook.main import app

CONTACT = {"name": "Ann", "email": "a@x.com", "phone": "555"}


@pytest.fixture
def db():
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)

    db_session = TestingSessionLocal()
    yield db_session
    db_session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_list_contacts_empty(client):
    response = client.get("/contacts")

    assert response.status_code == 200
    assert response.json() == {"message": "All contacts fetched successfully", "data": []}


def test_create_contact(client):
    response = client.post("/contacts", json=CONTACT)

    assert response.status_code == 201
    assert response.json() == {
        "message": "Contact added successfully",
        "data": {"id": 1, "name": "Ann", "email": "a@x.com", "phone": "555"},
    }


def test_create_contact_ignores_id(client):
    response = client.post("/contacts", json={**CONTACT, "id": 500})

    assert response.status_code == 201
    assert response.json()["data"]["id"] == 1


def test_create_contact_missing_field(client):
    response = client.post("/contacts", json={"name": "Ann", "email": "a@x.com"})

    assert response.status_code == 422


def test_create_then_get(client):
    contact_id = client.post("/contacts", json=CONTACT).json()["data"]["id"]

    response = client.get(f"/contacts/{contact_id}")

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Contact found"
    assert body["data"] == {"id": contact_id, **CONTACT}


def test_get_contact_not_found(client):
    response = client.get("/contacts/999")

    assert response.status_code == 404
    assert response.json() == {"message": "Contact not found", "data": None}


def test_list_contacts(client):
    client.post("/contacts", json=CONTACT)
    client.post("/contacts", json={"name": "Bob", "email": "b@x.com", "phone": "777"})

    response = client.get("/contacts")

    assert response.status_code == 200
    assert [c["name"] for c in response.json()["data"]] == ["Ann", "Bob"]


def test_update_contact(client):
    contact_id = client.post("/contacts", json=CONTACT).json()["data"]["id"]
    changes = {"id": 77, "name": "Anna", "email": "anna@x.com", "phone": "556"}

    response = client.put(f"/contacts/{contact_id}", json=changes)

    assert response.status_code == 200
    assert response.json() == {
        "message": "Contact updated successfully",
        "data": {"id": contact_id, "name": "Anna", "email": "anna@x.com", "phone": "556"},
    }
    assert client.get(f"/contacts/{contact_id}").json()["data"]["name"] == "Anna"
    assert client.get("/contacts/77").status_code == 404


def test_update_contact_not_found(client):
    response = client.put("/contacts/999", json=CONTACT)

    assert response.status_code == 404
    assert response.json() == {"message": "Contact not found", "data": None}
    assert client.get("/contacts").json()["data"] == []


def test_delete_contact(client):
    contact_id = client.post("/contacts", json=CONTACT).json()["data"]["id"]

    response = client.delete(f"/contacts/{contact_id}")

    assert response.status_code == 200
    assert response.json() == {"message": "Contact deleted successfully", "data": f"ID: {contact_id}"}
    assert client.get(f"/contacts/{contact_id}").status_code == 404


def test_delete_contact_not_found(client):
    client.post("/contacts", json=CONTACT)

    response = client.delete("/contacts/999")

    assert response.status_code == 404
    assert response.json() == {"message": "Contact not found", "data": None}
    assert len(client.get("/contacts").json()["data"]) == 1


@pytest.mark.parametrize("headers", [
    {},
    {"Authorization": "Bearer not-a-token"},
    {"Authorization": "Basic dXNlcjpwYXNz"},
])
def test_routes_ignore_credentials(client, headers):
    response = client.post("/contacts", json=CONTACT, headers=headers)

    assert response.status_code == 201


def test_valid_token_is_accepted(client):
    token = create_access_token({"user_id": 5})

    response = client.get("/contacts", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200


def test_cors_allowed_origin(client):
    response = client.options(
        "/contacts",
        headers={"Origin": "http://localhost:4200", "Access-Control-Request-Method": "GET"},
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "http://localhost:4200"


def test_cors_other_origin(client):
    response = client.get("/contacts", headers={"Origin": "http://evil.example"})

    assert "access-control-allow-origin" not in response.headers


@pytest.mark.parametrize("claims", [
    {"user_id": 1, "exp": None},
    {"user_id": 1, "exp": [1]},
    {"user_id": 1, "exp": float("inf")},
    {"user_id": float("inf")},
])
def test_signed_token_with_malformed_claims_is_ignored(client, claims):
    token = jwt.encode(claims, auth.SECRET_KEY, algorithm=auth.ALGORITHM)
    headers = {"Authorization": f"Bearer {token}"}

    assert client.get("/contacts", headers=headers).status_code == 200
    assert client.post("/contacts", json=CONTACT, headers=headers).status_code == 201


def test_openapi_describes_every_route(client):
    paths = client.get("/openapi.json").json()["paths"]
    operations = [
        paths["/contacts"]["get"],
        paths["/contacts"]["post"],
        paths["/contacts/{contact_id}"]["get"],
        paths["/contacts/{contact_id}"]["put"],
        paths["/contacts/{contact_id}"]["delete"],
    ]

    assert [op["summary"] for op in operations] == [
        "Fetch all contacts",
        "Add a new contact",
        "Fetch contact by ID",
        "Update a contact",
        "Delete a contact",
    ]
    for op in operations:
        assert op["tags"] == ["Address Book API"]
        assert op["description"]
