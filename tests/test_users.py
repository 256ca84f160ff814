from tests.conftest import auth_headers


async def test_register_always_creates_plain_user(client):
    response = await client.post(
        "/api/auth/register",
        json={"name": "Ana", "email": "Ana@Example.com", "password": "secreto123", "role": "admin"},
    )

    assert response.status_code == 201, response.text
    body = response.json()
    assert body["user"]["role"] == "user"
    assert body["user"]["email"] == "ana@example.com"
    assert "passwordHash" not in body["user"]
    assert body["token"]


async def test_register_duplicate_email(client, make_user):
    await make_user("ana@example.com")

    response = await client.post(
        "/api/auth/register",
        json={"name": "Ana", "email": "ana@example.com", "password": "secreto123"},
    )

    assert response.status_code == 400
    assert response.json()["error"] == "ValidationError"


async def test_register_short_password(client):
    response = await client.post(
        "/api/auth/register",
        json={"name": "Ana", "email": "ana@example.com", "password": "123"},
    )

    assert response.status_code == 400


async def test_login_and_profile(client, make_user):
    await make_user("ana@example.com")

    login = await client.post(
        "/api/auth/login", json={"email": "ana@example.com", "password": "secreto123"}
    )
    token = login.json()["token"]
    profile = await client.get("/api/auth/profile", headers={"Authorization": f"Bearer {token}"})

    assert login.status_code == 200
    assert profile.status_code == 200
    assert profile.json()["user"]["email"] == "ana@example.com"


async def test_login_with_wrong_password(client, make_user):
    await make_user("ana@example.com")

    wrong = await client.post("/api/auth/login", json={"email": "ana@example.com", "password": "otra-clave"})
    unknown = await client.post("/api/auth/login", json={"email": "nadie@example.com", "password": "secreto123"})

    assert wrong.status_code == 401
    assert wrong.json() == {"error": "UnauthenticatedError", "message": "Credenciales inválidas"}
    assert unknown.status_code == 401


async def test_admin_creates_distributor_user(client, admin_headers, create_distributor):
    distributor = await create_distributor("Norte")

    response = await client.post(
        "/api/users",
        json={
            "name": "Dist",
            "email": "dist@example.com",
            "password": "secreto123",
            "role": "distributor",
            "distributorId": distributor["id"],
        },
        headers=admin_headers,
    )

    assert response.status_code == 201, response.text
    assert response.json()["user"]["distributorId"] == distributor["id"]


async def test_distributor_user_requires_affiliation(client, admin_headers):
    missing = await client.post(
        "/api/users",
        json={"name": "Dist", "email": "dist@example.com", "password": "secreto123", "role": "distributor"},
        headers=admin_headers,
    )
    unknown = await client.post(
        "/api/users",
        json={
            "name": "Dist",
            "email": "dist@example.com",
            "password": "secreto123",
            "role": "distributor",
            "distributorId": "a" * 24,
        },
        headers=admin_headers,
    )

    assert missing.status_code == 400
    assert unknown.status_code == 400


async def test_role_change_clears_affiliation(client, admin_headers, make_user, create_distributor):
    distributor = await create_distributor("Norte")
    user = await make_user("dist@example.com", "distributor", distributor["id"])

    response = await client.put(
        f"/api/users/{user.id}", json={"role": "user"}, headers=admin_headers
    )

    assert response.status_code == 200, response.text
    assert response.json()["user"]["role"] == "user"
    assert response.json()["user"]["distributorId"] is None


async def test_user_with_affiliation_ignores_it_when_not_distributor(client, admin_headers, create_distributor):
    distributor = await create_distributor("Norte")

    response = await client.post(
        "/api/users",
        json={
            "name": "Admin 2",
            "email": "admin2@example.com",
            "password": "secreto123",
            "role": "admin",
            "distributorId": distributor["id"],
        },
        headers=admin_headers,
    )

    assert response.status_code == 201
    assert response.json()["user"]["distributorId"] is None


async def test_update_to_taken_email_is_rejected(client, admin_headers, make_user):
    await make_user("uno@example.com")
    other = await make_user("dos@example.com")

    response = await client.put(
        f"/api/users/{other.id}", json={"email": "uno@example.com"}, headers=admin_headers
    )

    assert response.status_code == 400


async def test_admin_cannot_delete_itself(client, admin, admin_headers):
    response = await client.delete(f"/api/users/{admin.id}", headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["error"] == "ValidationError"


async def test_admin_deletes_other_user(client, admin_headers, make_user):
    user = await make_user("ana@example.com")

    deleted = await client.delete(f"/api/users/{user.id}", headers=admin_headers)
    missing = await client.get(f"/api/users/{user.id}", headers=admin_headers)

    assert deleted.status_code == 200
    assert missing.status_code == 404


async def test_user_management_is_admin_only(client, make_user):
    user = await make_user("ana@example.com")

    response = await client.get("/api/users", headers=auth_headers(user))

    assert response.status_code == 403


async def test_list_users(client, admin_headers, make_user):
    await make_user("ana@example.com")

    response = await client.get("/api/users", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["count"] == 2
    assert {u["email"] for u in response.json()["users"]} == {"admin@example.com", "ana@example.com"}


async def test_distributor_with_users_cannot_be_deleted(
    client, admin_headers, make_user, create_distributor
):
    distributor = await create_distributor("Norte")
    await make_user("dist@example.com", "distributor", distributor["id"])

    response = await client.delete(f"/api/distribuidores/{distributor['id']}", headers=admin_headers)

    assert response.status_code == 400


async def test_brand_in_use_cannot_be_deleted(
    client, admin_headers, create_brand, create_distributor, create_device
):
    brand = await create_brand()
    unused = await create_brand("Libre", "Libre SA")
    distributor = await create_distributor("Norte")
    await create_device("B-1", brand["id"], [distributor["id"]])

    in_use = await client.delete(f"/api/marcas/{brand['id']}", headers=admin_headers)
    free = await client.delete(f"/api/marcas/{unused['id']}", headers=admin_headers)

    assert in_use.status_code == 400
    assert free.status_code == 200


async def test_brand_filters(client, admin_headers, create_brand):
    await create_brand("Acme", "Acme Corp")
    await create_brand("Beta", "Otra Corp")

    by_maker = await client.get("/api/marcas", params={"fabricante": "otra"}, headers=admin_headers)
    by_name = await client.get("/api/marcas", params={"marca": "ACM"}, headers=admin_headers)

    assert [b["name"] for b in by_maker.json()["brands"]] == ["Beta"]
    assert [b["name"] for b in by_name.json()["brands"]] == ["Acme"]
