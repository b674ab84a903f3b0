# tests/test_products_api.py
from tests.helpers import AUTH, make_client


def test_create_then_get_and_list():
    client, store = make_client()
    r = client.post("/api/products", json={"name": "Pen", "price": 1.5}, headers=AUTH)
    assert r.status_code == 201
    body = r.json()
    assert body["id"]
    assert body["name"] == "Pen" and body["price"] == 1.5

    r2 = client.get(f"/api/products/{body['id']}")
    assert r2.status_code == 200
    assert r2.json() == body

    listed = client.get("/api/products").json()
    assert [p["id"] for p in listed] == [body["id"]]


def test_collection_path_with_trailing_slash():
    client, _ = make_client()
    r = client.post("/api/products/", json={"name": "Pen", "price": 1}, headers=AUTH)
    assert r.status_code == 201
    assert len(client.get("/api/products/").json()) == 1


def test_extra_fields_are_stored_and_client_id_is_replaced():
    client, _ = make_client()
    r = client.post(
        "/api/products",
        json={"id": "mine", "name": "Mug", "price": 4, "color": "red", "tags": ["kitchen"]},
        headers=AUTH,
    )
    body = r.json()
    assert body["id"] != "mine"
    assert body["color"] == "red"
    assert body["tags"] == ["kitchen"]


def test_unknown_id_is_404_for_get_update_delete():
    client, _ = make_client()
    r = client.get("/api/products/nope")
    assert r.status_code == 404
    assert r.text == "Product not found"

    r = client.put("/api/products/nope", json={"name": "X", "price": 1}, headers=AUTH)
    assert r.status_code == 404
    assert r.text == "Product not found"

    r = client.delete("/api/products/nope", headers=AUTH)
    assert r.status_code == 404
    assert r.text == "Product not found"


def test_writes_without_token_are_rejected():
    client, store = make_client()
    r = client.post("/api/products", json={"name": "Pen", "price": 1.5})
    assert r.status_code == 401
    assert r.text == "Unauthorized"
    assert len(store) == 0

    pid = client.post("/api/products", json={"name": "Pen", "price": 1.5}, headers=AUTH).json()["id"]

    r = client.put(f"/api/products/{pid}", json={"name": "Pencil", "price": 2}, headers={"token": "wrong"})
    assert r.status_code == 401
    r = client.delete(f"/api/products/{pid}")
    assert r.status_code == 401

    # nothing changed
    assert client.get(f"/api/products/{pid}").json()["name"] == "Pen"
    assert len(store) == 1


def test_auth_runs_before_validation():
    client, _ = make_client()
    r = client.post("/api/products", json={"price": "free"})
    assert r.status_code == 401


def test_invalid_payloads_are_rejected():
    client, store = make_client()
    bad_bodies = [
        {"price": 1},
        {"name": "", "price": 1},
        {"name": None, "price": 1},
        {"name": "Pen"},
        {"name": "Pen", "price": "1.5"},
        {"name": "Pen", "price": True},
        {"name": "Pen", "price": None},
        ["Pen", 1],
    ]
    for body in bad_bodies:
        r = client.post("/api/products", json=body, headers=AUTH)
        assert r.status_code == 400, body
        assert r.text == "Invalid product"
    assert len(store) == 0


def test_non_json_body_reads_as_empty_object():
    client, store = make_client()
    r = client.post(
        "/api/products",
        content=b"name=Pen&price=1",
        headers={**AUTH, "content-type": "application/x-www-form-urlencoded"},
    )
    assert r.status_code == 400
    assert len(store) == 0


def test_update_is_a_shallow_merge():
    client, _ = make_client()
    created = client.post(
        "/api/products", json={"name": "Pen", "price": 1.5, "color": "blue"}, headers=AUTH
    ).json()

    r = client.put(f"/api/products/{created['id']}", json={"name": "Pen", "price": 2}, headers=AUTH)
    assert r.status_code == 200
    assert r.json() == {"id": created["id"], "name": "Pen", "price": 2, "color": "blue"}
    assert client.get(f"/api/products/{created['id']}").json()["color"] == "blue"


def test_update_payload_id_overrides_stored_id():
    client, _ = make_client()
    pid = client.post("/api/products", json={"name": "Pen", "price": 1}, headers=AUTH).json()["id"]
    r = client.put(f"/api/products/{pid}", json={"name": "Pen", "price": 2, "id": 7}, headers=AUTH)
    assert r.status_code == 200
    assert r.json() == {"id": "7", "name": "Pen", "price": 2}
    assert client.get("/api/products/7").json()["price"] == 2
    assert client.get(f"/api/products/{pid}").status_code == 404


def test_non_finite_numbers_are_rejected_without_touching_the_store():
    client, store = make_client()
    json_headers = {**AUTH, "content-type": "application/json"}
    for raw in [
        b'{"name": "Pen", "price": 1e400}',
        b'{"name": "Pen", "price": NaN}',
        b'{"name": "Pen", "price": 1, "weight": -Infinity}',
        b'{"name": "Pen", "price": 1, "dims": [1, 1e999]}',
    ]:
        r = client.post("/api/products", content=raw, headers=json_headers)
        assert r.status_code == 400, raw
        assert r.text == "Invalid product"
    assert len(store) == 0

    pid = client.post("/api/products", json={"name": "Pen", "price": 1}, headers=AUTH).json()["id"]
    r = client.put(f"/api/products/{pid}", content=b'{"name": "Pen", "price": 1e400}', headers=json_headers)
    assert r.status_code == 400
    assert client.get(f"/api/products/{pid}").json()["price"] == 1


def test_update_requires_valid_payload():
    client, _ = make_client()
    pid = client.post("/api/products", json={"name": "Pen", "price": 1}, headers=AUTH).json()["id"]
    r = client.put(f"/api/products/{pid}", json={"price": 5}, headers=AUTH)
    assert r.status_code == 400
    assert client.get(f"/api/products/{pid}").json()["price"] == 1


def test_search_is_case_insensitive_substring():
    client, _ = make_client()
    for name in ["Pen", "Fountain PEN", "Pencil case", "Notebook"]:
        client.post("/api/products", json={"name": name, "price": 1}, headers=AUTH)

    names = [p["name"] for p in client.get("/api/products", params={"search": "pen"}).json()]
    assert names == ["Pen", "Fountain PEN", "Pencil case"]

    assert client.get("/api/products", params={"search": "zzz"}).json() == []
    # empty search means no filter
    assert len(client.get("/api/products", params={"search": ""}).json()) == 4


def test_pagination_over_25_products():
    client, _ = make_client()
    for i in range(25):
        client.post("/api/products", json={"name": f"Item {i}", "price": i}, headers=AUTH)

    first = client.get("/api/products").json()
    assert [p["price"] for p in first] == list(range(0, 10))

    page2 = client.get("/api/products", params={"page": 2, "limit": 10}).json()
    assert [p["price"] for p in page2] == list(range(10, 20))

    page3 = client.get("/api/products", params={"page": 3, "limit": 10}).json()
    assert [p["price"] for p in page3] == list(range(20, 25))

    assert client.get("/api/products", params={"page": 10, "limit": 10}).json() == []


def test_unparseable_paging_falls_back_to_defaults():
    client, _ = make_client()
    for i in range(15):
        client.post("/api/products", json={"name": f"Item {i}", "price": i}, headers=AUTH)

    r = client.get("/api/products", params={"page": "abc", "limit": "lots"})
    assert r.status_code == 200
    assert [p["price"] for p in r.json()] == list(range(0, 10))

    # leading digits are honoured
    r = client.get("/api/products", params={"page": "2abc", "limit": "5.9"})
    assert [p["price"] for p in r.json()] == list(range(5, 10))


def test_non_positive_paging_does_not_error():
    client, _ = make_client()
    for i in range(5):
        client.post("/api/products", json={"name": f"Item {i}", "price": i}, headers=AUTH)

    assert client.get("/api/products", params={"limit": 0}).json() == []
    r = client.get("/api/products", params={"page": 0, "limit": 2})
    assert r.status_code == 200
    assert r.json() == []
    r = client.get("/api/products", params={"page": -1, "limit": 2})
    assert r.status_code == 200


def test_health():
    client, _ = make_client()
    client.post("/api/products", json={"name": "Pen", "price": 1}, headers=AUTH)
    assert client.get("/health").json() == {"status": "healthy", "products": 1}


def test_pen_scenario():
    client, store = make_client()

    r = client.post("/api/products", json={"name": "Pen", "price": 1.5}, headers=AUTH)
    assert r.status_code == 201
    pen = r.json()

    r = client.post("/api/products", json={"name": "Notebook", "price": 3})
    assert r.status_code == 401
    assert len(store) == 1

    r = client.get("/api/products", params={"search": "pen"})
    assert r.json() == [pen]

    r = client.delete(f"/api/products/{pen['id']}", headers=AUTH)
    assert r.status_code == 200
    assert r.json() == pen

    assert client.get(f"/api/products/{pen['id']}").status_code == 404
