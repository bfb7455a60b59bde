import logging
from datetime import date

from fastapi.testclient import TestClient

from app.domains.users.exceptions import StoreError


def create(client, name="Alice", dob="1990-06-15"):
    r = client.post("/users", json={"name": name, "dob": dob})
    assert r.status_code == 201, r.text
    return r.json()


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_request_id_header(client):
    first = client.get("/health").headers["X-Request-ID"]
    second = client.get("/health").headers["X-Request-ID"]
    assert first and second and first != second


def test_create_user_response_has_no_age(client):
    data = create(client)
    assert data == {"id": 1, "name": "Alice", "dob": "1990-06-15"}


def test_create_user_rejects_invalid_body(client, repo):
    assert client.post("/users", json={"name": "A", "dob": "1990-01-01"}).status_code == 400
    assert client.post("/users", json={"name": "Alice"}).status_code == 400
    assert client.post("/users", content=b"not json",
                       headers={"Content-Type": "application/json"}).status_code == 400
    assert repo.calls == []


def test_create_user_rejects_bad_date(client, repo):
    r = client.post("/users", json={"name": "Alice", "dob": "not-a-date"})
    assert r.status_code == 400
    assert "YYYY-MM-DD" in r.json()["detail"]
    assert repo.calls == []


def test_get_user_includes_age(client):
    created = create(client, dob="2000-06-16")
    r = client.get(f"/users/{created['id']}")
    assert r.status_code == 200
    assert r.json() == {"id": created["id"], "name": "Alice", "dob": "2000-06-16", "age": 23}


def test_get_user_born_today_has_age_zero(client):
    created = create(client, dob="2024-06-15")
    assert client.get(f"/users/{created['id']}").json()["age"] == 0


def test_get_user_bad_id_and_missing(client):
    assert client.get("/users/abc").status_code == 400
    r = client.get("/users/999")
    assert r.status_code == 404
    assert r.json()["detail"] == "User not found"


def test_list_users_envelope(client):
    for i in range(25):
        create(client, name=f"User {i:02d}")

    r = client.get("/users", params={"page": 3, "limit": 10})
    assert r.status_code == 200
    body = r.json()
    assert body["total"] == 25
    assert body["page"] == 3
    assert body["limit"] == 10
    assert body["total_pages"] == 3
    assert [u["id"] for u in body["data"]] == [21, 22, 23, 24, 25]
    assert all(u["age"] == 34 for u in body["data"])


def test_list_users_defaults_for_missing_or_garbage_params(client):
    create(client)
    default = client.get("/users").json()
    garbage = client.get("/users", params={"page": "x", "limit": "y"}).json()
    assert default == garbage
    assert default["page"] == 1
    assert default["limit"] == 10


def test_list_users_clamps_limit(client):
    assert client.get("/users", params={"limit": 1000}).json()["limit"] == 100


def test_list_users_store_failure(client, repo):
    repo.fail_with = StoreError("connection refused")
    r = client.get("/users")
    assert r.status_code == 500
    assert r.json()["detail"] == "Failed to retrieve users"


def test_get_user_store_failure_is_500(client, repo):
    repo.fail_with = StoreError("connection refused")
    r = client.get("/users/1")
    assert r.status_code == 500
    assert r.json()["detail"] == "Internal server error"


def test_update_user(client):
    created = create(client)
    r = client.put(f"/users/{created['id']}", json={"name": "Alicia", "dob": "1991-07-20"})
    assert r.status_code == 200
    assert r.json() == {"id": created["id"], "name": "Alicia", "dob": "1991-07-20"}

    fetched = client.get(f"/users/{created['id']}").json()
    assert fetched["name"] == "Alicia"
    assert fetched["dob"] == "1991-07-20"


def test_update_user_errors(client):
    created = create(client)
    assert client.put("/users/abc", json={"name": "Bob", "dob": "1990-01-01"}).status_code == 400
    assert client.put(f"/users/{created['id']}", json={"name": "Bob"}).status_code == 400
    assert client.put(f"/users/{created['id']}",
                      json={"name": "Bob", "dob": "1990/01/01"}).status_code == 400
    assert client.put("/users/999", json={"name": "Bob", "dob": "1990-01-01"}).status_code == 404


def test_delete_user(client):
    created = create(client)
    r = client.delete(f"/users/{created['id']}")
    assert r.status_code == 204
    assert r.content == b""
    assert client.get(f"/users/{created['id']}").status_code == 404


def test_delete_user_errors(client):
    assert client.delete("/users/abc").status_code == 400
    assert client.delete("/users/999").status_code == 404


def test_name_length_bounds(client):
    assert client.post("/users", json={"name": "ab", "dob": "1990-01-01"}).status_code == 201
    assert client.post("/users", json={"name": "x" * 100, "dob": "1990-01-01"}).status_code == 201
    assert client.post("/users", json={"name": "x" * 101, "dob": "1990-01-01"}).status_code == 400


def test_whitespace_only_name_is_rejected(client, repo):
    assert client.post("/users", json={"name": "   ", "dob": "1990-01-01"}).status_code == 400
    created = create(client)
    r = client.put(f"/users/{created['id']}", json={"name": "    ", "dob": "1990-01-01"})
    assert r.status_code == 400
    assert repo.calls == [("create", "Alice", date(1990, 6, 15))]


def test_out_of_range_user_id_is_bad_request(client, repo):
    too_big = 2 ** 31
    too_small = -(2 ** 31) - 1
    assert client.get(f"/users/{too_big}").status_code == 400
    assert client.get(f"/users/{too_small}").status_code == 400
    assert client.put(f"/users/{too_big}", json={"name": "Bob", "dob": "1990-01-01"}).status_code == 400
    assert client.delete(f"/users/{too_big}").status_code == 400
    assert repo.calls == []

    assert client.get(f"/users/{2 ** 31 - 1}").status_code == 404


def test_out_of_range_page_and_limit_fall_back_to_defaults(client, repo):
    r = client.get("/users", params={"page": "99999999999999999999", "limit": str(2 ** 31)})
    assert r.status_code == 200
    body = r.json()
    assert body["page"] == 1
    assert body["limit"] == 10
    assert repo.calls[-1] == ("list", 10, 0)


def test_largest_page_keeps_offset_in_range(client, repo):
    r = client.get("/users", params={"page": str(2 ** 31 - 1), "limit": "100"})
    assert r.status_code == 200
    assert repo.calls[-1] == ("list", 100, (2 ** 31 - 2) * 100)


def test_unhandled_error_returns_500_with_request_id_and_is_logged(service, repo, caplog):
    from app.api.dependencies import get_user_service
    from app.main import create_app

    app = create_app()
    app.dependency_overrides[get_user_service] = lambda: service
    client = TestClient(app, raise_server_exceptions=False)
    repo.fail_with = RuntimeError("boom")

    with caplog.at_level(logging.INFO, logger="app.requests"):
        r = client.get("/users/1")

    assert r.status_code == 500
    assert r.json() == {"detail": "Internal server error"}
    request_id = r.headers["X-Request-ID"]
    assert request_id

    completed = [
        rec.getMessage() for rec in caplog.records
        if rec.name == "app.requests" and "Request completed" in rec.getMessage()
    ]
    assert len(completed) == 1
    assert f"request_id={request_id}" in completed[0]
    assert "status=500" in completed[0]
    assert "path=/users/1" in completed[0]


def test_request_duration_is_logged(client, caplog):
    with caplog.at_level(logging.INFO, logger="app.requests"):
        r = client.get("/health")

    messages = [rec.getMessage() for rec in caplog.records if rec.name == "app.requests"]
    assert any(
        f"request_id={r.headers['X-Request-ID']}" in m and "status=200" in m and "duration=" in m
        for m in messages
    )
