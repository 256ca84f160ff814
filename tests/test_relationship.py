import pytest

from alcance.app.admin.crud import distributor_crud
from alcance.app.admin.service.relationship import diff_distributor_sets


async def device_refs(session_factory, distributor_id):
    async with session_factory() as session:
        distributor = await distributor_crud.get(session, distributor_id)
        return list(distributor.device_ids)


@pytest.fixture
def spy_refs(monkeypatch):
    """Registra cada add/pull sobre las listas inversas"""
    calls = []
    original_add = distributor_crud.add_device_ref
    original_pull = distributor_crud.pull_device_ref

    async def add(db, id, device_id):
        calls.append(("add", id))
        return await original_add(db, id, device_id)

    async def pull(db, id, device_id):
        calls.append(("pull", id))
        return await original_pull(db, id, device_id)

    monkeypatch.setattr(distributor_crud, "add_device_ref", add)
    monkeypatch.setattr(distributor_crud, "pull_device_ref", pull)
    return calls


def test_diff_keeps_order_and_ignores_unchanged():
    to_remove, to_add = diff_distributor_sets(["a", "b", "c"], ["c", "d", "a", "e"])
    assert to_remove == ["b"]
    assert to_add == ["d", "e"]


def test_diff_of_identical_sets_is_empty():
    assert diff_distributor_sets(["a", "b"], ["b", "a"]) == ([], [])


async def test_create_adds_back_reference_to_every_distributor(
    client, session_factory, create_brand, create_distributor, create_device
):
    brand = await create_brand()
    d1 = await create_distributor("Uno")
    d2 = await create_distributor("Dos")

    device = await create_device("X-100", brand["id"], [d1["id"], d2["id"]])

    assert [d["id"] for d in device["distributors"]] == [d1["id"], d2["id"]]
    assert device["brand"]["id"] == brand["id"]
    assert await device_refs(session_factory, d1["id"]) == [device["id"]]
    assert await device_refs(session_factory, d2["id"]) == [device["id"]]


async def test_update_only_touches_changed_distributors(
    client, admin_headers, session_factory, create_brand, create_distributor, create_device, spy_refs
):
    brand = await create_brand()
    d1 = await create_distributor("Uno")
    d2 = await create_distributor("Dos")
    d3 = await create_distributor("Tres")
    device = await create_device("X-200", brand["id"], [d1["id"], d2["id"]])
    spy_refs.clear()

    response = await client.put(
        f"/api/dispositivos/{device['id']}",
        json={"distributors": [d2["id"], d3["id"]]},
        headers=admin_headers,
    )

    assert response.status_code == 200, response.text
    assert sorted(spy_refs) == [("add", d3["id"]), ("pull", d1["id"])]
    assert await device_refs(session_factory, d1["id"]) == []
    assert await device_refs(session_factory, d2["id"]) == [device["id"]]
    assert await device_refs(session_factory, d3["id"]) == [device["id"]]
    body = response.json()["device"]
    assert [d["id"] for d in body["distributors"]] == [d2["id"], d3["id"]]


async def test_update_without_distributors_leaves_relationship_alone(
    client, admin_headers, create_brand, create_distributor, create_device, spy_refs
):
    brand = await create_brand()
    d1 = await create_distributor("Uno")
    device = await create_device("X-300", brand["id"], [d1["id"]])
    spy_refs.clear()

    response = await client.put(
        f"/api/dispositivos/{device['id']}",
        json={"type": "router"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert spy_refs == []
    assert response.json()["device"]["type"] == "router"


async def test_delete_pulls_every_back_reference(
    client, admin_headers, session_factory, create_brand, create_distributor, create_device
):
    brand = await create_brand()
    d1 = await create_distributor("Uno")
    d2 = await create_distributor("Dos")
    device = await create_device("X-400", brand["id"], [d1["id"], d2["id"]])

    response = await client.delete(f"/api/dispositivos/{device['id']}", headers=admin_headers)

    assert response.status_code == 200
    assert await device_refs(session_factory, d1["id"]) == []
    assert await device_refs(session_factory, d2["id"]) == []
    missing = await client.get(f"/api/dispositivos/{device['id']}", headers=admin_headers)
    assert missing.status_code == 404


async def test_invalid_distributor_rejects_without_writing(
    client, admin_headers, session_factory, create_brand, create_distributor
):
    brand = await create_brand()
    d1 = await create_distributor("Uno")
    ghost = "0" * 24

    response = await client.post(
        "/api/dispositivos",
        json={"model": "X-500", "brand": brand["id"], "distributors": [d1["id"], ghost]},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert response.json()["error"] == "ValidationError"
    assert ghost in response.json()["message"]
    assert await device_refs(session_factory, d1["id"]) == []
    listed = await client.get("/api/dispositivos", headers=admin_headers)
    assert listed.json()["count"] == 0


async def test_multi_generation_requires_a_distributor(client, admin_headers, create_brand):
    brand = await create_brand()

    response = await client.post(
        "/api/dispositivos",
        json={"model": "X-600", "brand": brand["id"], "distributors": []},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert response.json()["error"] == "ValidationError"


async def test_duplicate_model_is_exact_match(
    client, admin_headers, create_brand, create_distributor, create_device
):
    brand = await create_brand()
    d1 = await create_distributor("Uno")
    await create_device("Model-A", brand["id"], [d1["id"]])

    duplicate = await client.post(
        "/api/dispositivos",
        json={"model": "  Model-A ", "brand": brand["id"], "distributors": [d1["id"]]},
        headers=admin_headers,
    )
    other_case = await client.post(
        "/api/dispositivos",
        json={"model": "model-a", "brand": brand["id"], "distributors": [d1["id"]]},
        headers=admin_headers,
    )

    assert duplicate.status_code == 400
    assert duplicate.json()["error"] == "ValidationError"
    assert other_case.status_code == 201


async def test_unknown_brand_is_not_found(client, admin_headers, create_distributor):
    d1 = await create_distributor("Uno")

    response = await client.post(
        "/api/dispositivos",
        json={"model": "X-700", "brand": "a" * 24, "distributors": [d1["id"]]},
        headers=admin_headers,
    )

    assert response.status_code == 404
    assert response.json()["error"] == "NotFoundError"


async def test_missing_model_or_brand_is_validation_error(client, admin_headers, create_distributor):
    d1 = await create_distributor("Uno")

    response = await client.post(
        "/api/dispositivos",
        json={"distributors": [d1["id"]]},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert response.json()["error"] == "ValidationError"


async def test_update_fields_and_clear_optional_values(
    client, admin_headers, create_brand, create_distributor, create_device
):
    brand = await create_brand()
    d1 = await create_distributor("Uno")
    device = await create_device(
        "X-800", brand["id"], [d1["id"]],
        subtelCertificationDate="2024-03-01T00:00:00",
        subtelCertificationOffice="OF-123",
        technologies=["LoRa"],
        EIRP=["20 dBm"],
    )
    assert device["EIRP"] == ["20 dBm"]
    assert device["resolutionVersion"] == "2017"

    response = await client.put(
        f"/api/dispositivos/{device['id']}",
        json={
            "subtelCertificationDate": None,
            "subtelCertificationOffice": "",
            "technologies": "no es una lista",
            "resolutionVersion": "2025",
        },
        headers=admin_headers,
    )

    assert response.status_code == 200, response.text
    updated = response.json()["device"]
    assert updated["subtelCertificationDate"] is None
    assert updated["subtelCertificationOffice"] == ""
    assert updated["technologies"] == []
    assert updated["resolutionVersion"] == "2025"
    assert updated["EIRP"] == ["20 dBm"]
    assert updated["model"] == "X-800"


async def test_resolution_version_outside_enum_is_rejected(
    client, admin_headers, create_brand, create_distributor, create_device
):
    brand = await create_brand()
    d1 = await create_distributor("Uno")
    device = await create_device("X-900", brand["id"], [d1["id"]])

    response = await client.put(
        f"/api/dispositivos/{device['id']}",
        json={"resolutionVersion": "2019"},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert response.json()["error"] == "ValidationError"


async def test_update_unknown_device_is_not_found(client, admin_headers):
    response = await client.put(
        f"/api/dispositivos/{'b' * 24}",
        json={"type": "x"},
        headers=admin_headers,
    )

    assert response.status_code == 404


async def test_single_generation_allows_null_and_moves_reference(
    client, admin_headers, session_factory, create_brand, create_distributor, single_generation
):
    brand = await create_brand()
    d1 = await create_distributor("Uno")
    d2 = await create_distributor("Dos")

    created = await client.post(
        "/api/dispositivos",
        json={"model": "S-1", "brand": brand["id"], "distributor": None},
        headers=admin_headers,
    )
    assert created.status_code == 201, created.text
    device = created.json()["device"]
    assert device["distributor"] is None
    assert "distributors" not in device

    moved = await client.put(
        f"/api/dispositivos/{device['id']}",
        json={"distributor": d1["id"]},
        headers=admin_headers,
    )
    assert moved.json()["device"]["distributor"]["id"] == d1["id"]

    moved = await client.put(
        f"/api/dispositivos/{device['id']}",
        json={"distributor": d2["id"]},
        headers=admin_headers,
    )
    assert moved.json()["device"]["distributor"]["id"] == d2["id"]
    assert await device_refs(session_factory, d1["id"]) == []
    assert await device_refs(session_factory, d2["id"]) == [device["id"]]

    cleared = await client.put(
        f"/api/dispositivos/{device['id']}",
        json={"distributor": None},
        headers=admin_headers,
    )
    assert cleared.json()["device"]["distributor"] is None
    assert await device_refs(session_factory, d2["id"]) == []


async def test_single_generation_rejects_unknown_distributor(
    client, admin_headers, create_brand, single_generation
):
    brand = await create_brand()

    response = await client.post(
        "/api/dispositivos",
        json={"model": "S-2", "brand": brand["id"], "distributor": "c" * 24},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert response.json()["error"] == "ValidationError"


async def test_deleting_distributor_removes_it_from_devices(
    client, admin_headers, create_brand, create_distributor, create_device
):
    brand = await create_brand()
    d1 = await create_distributor("Uno")
    d2 = await create_distributor("Dos")
    device = await create_device("X-1000", brand["id"], [d1["id"], d2["id"]])

    response = await client.delete(f"/api/distribuidores/{d1['id']}", headers=admin_headers)

    assert response.status_code == 200
    detail = await client.get(f"/api/dispositivos/{device['id']}", headers=admin_headers)
    assert [d["id"] for d in detail.json()["device"]["distributors"]] == [d2["id"]]


async def test_sole_distributor_of_a_device_cannot_be_deleted(
    client, admin_headers, session_factory, create_brand, create_distributor, create_device
):
    brand = await create_brand()
    solo = await create_distributor("Solo")
    other = await create_distributor("Otro")
    device = await create_device("X-1100", brand["id"], [solo["id"]])
    await create_device("X-1101", brand["id"], [solo["id"], other["id"]])

    response = await client.delete(f"/api/distribuidores/{solo['id']}", headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["error"] == "ValidationError"
    assert "1 dispositivos" in response.json()["message"]
    detail = await client.get(f"/api/dispositivos/{device['id']}", headers=admin_headers)
    assert [d["id"] for d in detail.json()["device"]["distributors"]] == [solo["id"]]
    assert len(await device_refs(session_factory, solo["id"])) == 2


async def test_single_generation_allows_deleting_the_only_distributor(
    client, admin_headers, create_brand, create_distributor, single_generation
):
    brand = await create_brand()
    solo = await create_distributor("Solo")
    created = await client.post(
        "/api/dispositivos",
        json={"model": "S-3", "brand": brand["id"], "distributor": solo["id"]},
        headers=admin_headers,
    )
    device = created.json()["device"]

    response = await client.delete(f"/api/distribuidores/{solo['id']}", headers=admin_headers)

    assert response.status_code == 200
    detail = await client.get(f"/api/dispositivos/{device['id']}", headers=admin_headers)
    assert detail.json()["device"]["distributor"] is None
