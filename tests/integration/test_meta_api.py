"""
Integration tests for the meta key/value endpoints
"""


def test_missing_meta_key(client):
    r = client.get("/api/meta/ui")
    assert r.status_code == 404
    assert r.json() == {"ok": False, "error": "Meta key not found"}


def test_put_then_replace_meta(client):
    r = client.put("/api/meta/ui", json={"value": {"theme": "dark", "pinned": ["trip_1"]}})
    assert r.status_code == 200
    item = r.json()["item"]
    assert item["key"] == "ui"
    assert item["value"] == {"theme": "dark", "pinned": ["trip_1"]}

    client.put("/api/meta/ui", json={"value": [1, 2, 3]})
    r = client.get("/api/meta/ui")
    assert r.json()["item"]["value"] == [1, 2, 3]


def test_meta_value_may_be_null_but_must_be_present(client):
    r = client.put("/api/meta/last-sync", json={"value": None})
    assert r.status_code == 200
    assert r.json()["item"]["value"] is None

    r = client.put("/api/meta/last-sync", json={"other": 1})
    assert r.status_code == 400
    assert r.json()["error"] == "value is required"
