"""HTTP contract tests for the FastAPI surface."""

import pytest

from app.services import AdminRecordStore, CredentialStore


async def register(client, payload):
    response = await client.post("/register", json=payload)
    assert response.status_code == 201, response.text
    return response.json()["user"]


async def test_root_and_health(client):
    assert (await client.get("/")).status_code == 200

    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["database"] == "healthy"


async def test_customer_scenario(client, register_payload):
    response = await client.post("/register", json=register_payload())
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "User registered"
    assert body["user"]["approval"] == "approved"
    assert "password" not in body["user"]

    response = await client.post("/login", json={"email": "a@x.com", "password": "pw123"})
    assert response.status_code == 200
    assert response.json()["message"] == "Login successful"
    assert response.json()["user"]["approval"] == "approved"


async def test_restaurant_scenario(client, register_payload):
    response = await client.post("/register", json=register_payload(
        username="bob",
        email="b@x.com",
        usertype="restaurant",
        password="pw456",
        restaurantAddress="123 Main St",
        restaurantImage="img.png",
    ))
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Restaurant registered"
    assert body["user"]["approval"] == "pending"

    restaurants = (await client.get("/fetch-restaurants")).json()
    assert len(restaurants) == 1
    assert restaurants[0]["owner_id"] == body["user"]["id"]
    assert restaurants[0]["title"] == "bob"
    assert restaurants[0]["address"] == "123 Main St"
    assert restaurants[0]["main_img"] == "img.png"
    assert restaurants[0]["menu"] == []


async def test_register_missing_fields(client):
    response = await client.post("/register", json={"username": "alice", "email": "a@x.com"})
    assert response.status_code == 400
    assert response.json()["message"] == "Missing required fields"
    assert "password" in response.json()["error"]


async def test_register_existing_user(client, register_payload):
    await register(client, register_payload())

    response = await client.post("/register", json=register_payload(username="alice2"))
    assert response.status_code == 400
    assert response.json() == {"message": "User already exists", "error": "User already exists"}

    users = (await client.get("/fetch-users")).json()
    assert [u["email"] for u in users] == ["a@x.com"]


async def test_login_errors(client, register_payload):
    await register(client, register_payload())

    response = await client.post("/login", json={"email": "a@x.com"})
    assert response.status_code == 400

    wrong = await client.post("/login", json={"email": "a@x.com", "password": "bad"})
    unknown = await client.post("/login", json={"email": "z@x.com", "password": "pw123"})
    assert wrong.status_code == unknown.status_code == 401
    assert wrong.json() == unknown.json()


async def test_approve_and_reject(client, register_payload):
    owner = await register(client, register_payload(
        username="bob", email="b@x.com", usertype="restaurant", password="pw456"
    ))

    response = await client.post("/approve-user", json={"id": owner["id"]})
    assert response.status_code == 200
    assert response.json() == {"message": "User approved"}

    login = await client.post("/login", json={"email": "b@x.com", "password": "pw456"})
    assert login.json()["user"]["approval"] == "approved"

    response = await client.post("/reject-user", json={"id": owner["id"]})
    assert response.json() == {"message": "User rejected"}

    users = {u["id"]: u for u in (await client.get("/fetch-users")).json()}
    assert users[owner["id"]]["approval"] == "rejected"


@pytest.mark.parametrize("path", ["/approve-user", "/reject-user"])
async def test_approval_errors(client, path):
    response = await client.post(path, json={})
    assert response.status_code == 400
    assert response.json()["message"] == "User ID is required"

    response = await client.post(path, json={"id": "missing"})
    assert response.status_code == 404
    assert response.json()["message"] == "User not found"


async def test_update_promote_list(client, session):
    response = await client.post("/update-promote-list", json={"promoteList": ["r1"]})
    assert response.status_code == 404
    assert response.json()["message"] == "Admin record not found"

    await AdminRecordStore(session).provision()

    response = await client.post("/update-promote-list", json={"promoteList": "r1"})
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid promote list"

    response = await client.post("/update-promote-list", json={"promoteList": ["r1", "r2"]})
    assert response.status_code == 200
    assert response.json() == {"message": "Promote list updated successfully"}

    session.expire_all()
    admin = await AdminRecordStore(session).get()
    assert admin.promoted_restaurants == ["r1", "r2"]


async def test_add_to_cart(client, register_payload):
    owner = await register(client, register_payload(
        username="bob", email="b@x.com", usertype="restaurant", password="pw456"
    ))
    customer = await register(client, register_payload())
    restaurant = (await client.get("/fetch-restaurants")).json()[0]
    assert restaurant["owner_id"] == owner["id"]

    item = {
        "userId": customer["id"],
        "foodItemId": "pizza-1",
        "foodItemName": "Pizza Margherita",
        "restaurantId": restaurant["id"],
        "foodItemImg": "pizza.png",
        "price": 14.99,
        "discount": 0,
        "quantity": 1,
    }
    response = await client.post("/add-to-cart", json=item)
    assert response.status_code == 200
    assert response.json() == {"message": "Item added to cart"}

    response = await client.post("/add-to-cart", json={**item, "restaurantId": "missing"})
    assert response.status_code == 404
    assert response.json()["message"] == "Restaurant not found"

    response = await client.post("/add-to-cart", json={**item, "quantity": None})
    assert response.status_code == 400
    assert response.json()["message"] == "Missing required cart item fields"


async def test_malformed_body_is_400(client):
    response = await client.post("/add-to-cart", json={"userId": "u", "quantity": "lots"})
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid request"
    assert "quantity" in response.json()["error"]


async def test_unexpected_error_is_generic_500(client, monkeypatch):
    async def boom(self):
        raise RuntimeError("connection string with secrets")

    monkeypatch.setattr(CredentialStore, "list_all", boom)

    response = await client.get("/fetch-users")
    assert response.status_code == 500
    assert response.json() == {
        "message": "Server Error",
        "error": "An unexpected error occurred",
    }


async def test_register_blank_email_is_400(client, register_payload):
    response = await client.post("/register", json=register_payload(email="   "))
    assert response.status_code == 400
    assert response.json()["message"] == "Missing required fields"

    assert (await client.get("/fetch-users")).json() == []


async def test_lone_surrogate_password(client, register_payload):
    # Sent as raw JSON so the \ud800 escape reaches the server untouched
    body = '{"username": "alice", "email": "a@x.com", "usertype": "customer", "password": "\\ud800"}'
    response = await client.post(
        "/register", content=body, headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid password"

    await register(client, register_payload())
    response = await client.post(
        "/login",
        content='{"email": "a@x.com", "password": "\\ud800"}',
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid email or password"
