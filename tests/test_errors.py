from alcance.app.admin.service import brand_service


async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert "X-Process-Time" in response.headers


async def test_unauthenticated_sets_bearer_challenge(client):
    response = await client.get("/api/users")

    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"
    assert set(response.json()) == {"error", "message"}


async def test_unknown_route_uses_error_body(client):
    response = await client.get("/api/no-existe")

    assert response.status_code == 404
    assert response.json()["error"] == "NotFoundError"


async def test_invalid_json_is_validation_error(client, admin_headers):
    response = await client.post(
        "/api/marcas",
        content=b"{no es json",
        headers={**admin_headers, "Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["error"] == "ValidationError"


async def test_schema_errors_are_joined_into_message(client, admin_headers):
    response = await client.post(
        "/api/distribuidores",
        json={"representativeName": "Norte", "email": "no-es-correo", "website": "ftp://x"},
        headers=admin_headers,
    )

    assert response.status_code == 400
    message = response.json()["message"]
    assert "Correo electrónico inválido" in message
    assert "http:// o https://" in message
    assert "Value error" not in message


async def test_unexpected_failure_is_internal_error(client, admin_headers, monkeypatch):
    async def broken(*args, **kwargs):
        raise RuntimeError("fallo inesperado")

    monkeypatch.setattr(brand_service, "get_brand_list", broken)

    response = await client.get("/api/marcas", headers=admin_headers)

    assert response.status_code == 500
    assert response.json() == {"error": "InternalError", "message": "fallo inesperado"}
