import pytest


def _create(client, **fields):
    r = client.post("/api/Product/", json=fields)
    assert r.status_code == 201
    return r.json()


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_list_empty(client):
    r = client.get("/api/Product/")
    assert r.status_code == 200
    assert r.json() == []


def test_pen_lifecycle(client):
    r = client.post(
        "/api/Product/",
        json={"name": "Pen", "description": "Blue ink", "quantity": 10},
    )
    assert r.status_code == 201
    created = r.json()
    pid = created["id"]
    assert pid == 1
    assert r.headers["location"] == f"/api/Product/{pid}"

    r = client.get(f"/api/Product/{pid}")
    assert r.status_code == 200
    assert r.json() == {"id": pid, "name": "Pen", "description": "Blue ink", "quantity": 10}

    r = client.put(
        f"/api/Product/{pid}",
        json={"id": pid, "name": "Pen", "description": "Blue ink", "quantity": 5},
    )
    assert r.status_code == 200
    assert r.content == b""

    assert client.get(f"/api/Product/{pid}").json()["quantity"] == 5

    r = client.delete(f"/api/Product/{pid}")
    assert r.status_code == 200
    assert r.content == b""

    r = client.get(f"/api/Product/{pid}")
    assert r.status_code == 404
    assert r.content == b""


def test_create_ignores_client_id(client):
    first = _create(client, id=999, name="Pencil")
    second = _create(client, id=999, name="Eraser")

    assert first["id"] != 999
    assert second["id"] != first["id"]
    assert client.get("/api/Product/999").status_code == 404


def test_create_defaults(client):
    created = _create(client)
    assert created["name"] is None
    assert created["description"] is None
    assert created["quantity"] == 0

    fetched = client.get(f"/api/Product/{created['id']}").json()
    assert fetched == created


@pytest.mark.parametrize(
    "body",
    [
        {"name": "Pen", "quantity": "lots"},
        {"name": ["not", "a", "string"]},
        [1, 2, 3],
    ],
)
def test_create_rejects_malformed_body(client, body):
    r = client.post("/api/Product/", json=body)
    assert r.status_code == 400
    assert client.get("/api/Product/").json() == []


def test_non_integer_path_id_is_bad_request(client):
    assert client.get("/api/Product/abc").status_code == 400


def test_update_is_full_replace(client):
    created = _create(client, name="Mug", description="Ceramic", quantity=3)
    pid = created["id"]

    r = client.put(f"/api/Product/{pid}", json={"id": pid, "quantity": 7})
    assert r.status_code == 200

    assert client.get(f"/api/Product/{pid}").json() == {
        "id": pid,
        "name": None,
        "description": None,
        "quantity": 7,
    }


def test_update_keys_on_path_id(client):
    a = _create(client, name="A")
    b = _create(client, name="B")

    r = client.put(f"/api/Product/{a['id']}", json={"id": b["id"], "name": "A2"})
    assert r.status_code == 200

    assert client.get(f"/api/Product/{a['id']}").json()["name"] == "A2"
    assert client.get(f"/api/Product/{b['id']}").json()["name"] == "B"


def test_missing_id_is_not_found_everywhere(client):
    assert client.get("/api/Product/42").status_code == 404
    assert client.put("/api/Product/42", json={"name": "x"}).status_code == 404
    assert client.delete("/api/Product/42").status_code == 404
    assert client.get("/api/Product/").json() == []


def test_delete_twice(client):
    pid = _create(client, name="Cup")["id"]

    assert client.delete(f"/api/Product/{pid}").status_code == 200
    assert client.delete(f"/api/Product/{pid}").status_code == 404


def test_list_after_creates_and_deletes(client):
    ids = [_create(client, name=f"item-{i}", quantity=i)["id"] for i in range(5)]
    for pid in ids[:2]:
        assert client.delete(f"/api/Product/{pid}").status_code == 200

    listed = client.get("/api/Product/").json()
    assert len(listed) == 3
    assert {p["id"] for p in listed} == set(ids[2:])


def test_last_write_wins(client):
    pid = _create(client, name="Lamp", quantity=1)["id"]

    client.put(f"/api/Product/{pid}", json={"name": "Lamp", "quantity": 2})
    client.put(f"/api/Product/{pid}", json={"name": "Lamp", "quantity": 3})

    assert client.get(f"/api/Product/{pid}").json()["quantity"] == 3


@pytest.mark.parametrize(
    "body",
    [
        {"name": "Pen", "quantity": 2**63},
        {"name": "Pen", "quantity": 2**31},
        {"name": "Pen", "quantity": -(2**31) - 1},
        {"id": 2**31, "name": "Pen"},
    ],
)
def test_out_of_range_integers_are_bad_request(client, body):
    r = client.post("/api/Product/", json=body)
    assert r.status_code == 400
    assert client.get("/api/Product/").json() == []


def test_int32_bounds_are_accepted(client):
    created = _create(client, name="Big", quantity=2**31 - 1)
    assert client.get(f"/api/Product/{created['id']}").json()["quantity"] == 2**31 - 1

    r = client.put(f"/api/Product/{created['id']}", json={"quantity": 2**63})
    assert r.status_code == 400
    assert client.get(f"/api/Product/{created['id']}").json()["quantity"] == 2**31 - 1


@pytest.mark.parametrize("product_id", [2**31, 2**64, -(2**31) - 1])
def test_out_of_range_path_id_is_bad_request(client, product_id):
    assert client.get(f"/api/Product/{product_id}").status_code == 400
    assert client.put(f"/api/Product/{product_id}", json={"name": "x"}).status_code == 400
    assert client.delete(f"/api/Product/{product_id}").status_code == 400


def test_negative_path_id_in_range_is_not_found(client):
    assert client.get("/api/Product/-1").status_code == 404
