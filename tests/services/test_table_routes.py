"""Table Routes: end-to-end CRUD over a real SQLite database.

Tests cover:
    - GET /tables lists user tables and hides sqlite_ internals
    - GET /tables/{t} paginates with limit/offset defaults 100/0
    - GET /tables/{t}/{id} returns the row or 404, idempotently
    - POST creates (201, lastRowId) and round-trips through GET
    - PUT/DELETE report changes or 404 for unknown ids
    - Body validation: empty, non-object, nested values
    - Database errors surface as 500 with the engine message, out-of-range integers included
    - BLOB values render as lists of byte values
    - Write bodies are parsed as JSON whatever the Content-Type
"""

import pytest

from sql_gateway.core.domain_types import Statement


# ─── list tables ─────────────────────────────────────────────────

async def test_list_tables_hides_internal_tables(client, auth, users_table):
    res = await client.get("/tables", headers=auth)
    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    names = [row["name"] for row in body["data"]]
    assert names == ["users"]


async def test_list_tables_on_empty_database(client, auth):
    res = await client.get("/tables", headers=auth)
    assert res.status_code == 200
    assert res.json() == {"success": True, "data": []}


# ─── list records ────────────────────────────────────────────────

async def test_list_records_returns_rows_and_meta(client, auth, users_table):
    res = await client.get("/tables/users", headers=auth)
    assert res.status_code == 200
    body = res.json()
    assert [row["name"] for row in body["data"]] == ["Ada", "Grace"]
    assert body["meta"]["rows_read"] == 2
    assert set(body["meta"]) == {
        "last_row_id", "changes", "duration", "rows_read", "rows_written",
    }


async def test_limit_zero_returns_empty_data(client, auth, users_table):
    res = await client.get("/tables/users", params={"limit": 0}, headers=auth)
    assert res.status_code == 200
    assert res.json()["data"] == []


async def test_limit_and_offset_page_through(client, auth, users_table):
    res = await client.get(
        "/tables/users", params={"limit": 1, "offset": 1}, headers=auth,
    )
    assert [row["name"] for row in res.json()["data"]] == ["Grace"]


async def test_unparseable_limit_falls_back_to_default(client, auth, users_table):
    res = await client.get(
        "/tables/users", params={"limit": "lots", "offset": "none"}, headers=auth,
    )
    assert res.status_code == 200
    assert len(res.json()["data"]) == 2


async def test_list_unknown_table_is_execution_error(client, auth):
    res = await client.get("/tables/missing", headers=auth)
    assert res.status_code == 500
    body = res.json()
    assert body["success"] is False
    assert "no such table: missing" in body["error"]
    assert "data" not in body


async def test_out_of_range_limit_is_execution_error(client, auth, users_table):
    res = await client.get(
        "/tables/users", params={"limit": "99999999999999999999"}, headers=auth,
    )
    assert res.status_code == 500
    body = res.json()
    assert body["success"] is False
    assert "too large" in body["error"]


# ─── get by id ───────────────────────────────────────────────────

async def test_get_record_by_id(client, auth, users_table):
    res = await client.get("/tables/users/1", headers=auth)
    assert res.status_code == 200
    assert res.json()["data"] == {
        "id": 1, "name": "Ada", "email": "ada@example.com", "active": 1,
    }


async def test_get_record_is_idempotent(client, auth, users_table):
    first = await client.get("/tables/users/2", headers=auth)
    second = await client.get("/tables/users/2", headers=auth)
    assert first.json()["data"] == second.json()["data"]
    assert first.content == second.content


async def test_get_missing_record_is_404(client, auth, users_table):
    res = await client.get("/tables/users/999999", headers=auth)
    assert res.status_code == 404
    assert res.json() == {"success": False, "error": "Record not found"}


# ─── create ──────────────────────────────────────────────────────

async def test_create_then_get_round_trip(client, auth, users_table):
    res = await client.post(
        "/tables/users", json={"name": "A", "email": "a@x.com"}, headers=auth,
    )
    assert res.status_code == 201
    data = res.json()["data"]
    assert data["changes"] == 1
    assert data["lastRowId"] == 3

    fetched = await client.get(f"/tables/users/{data['lastRowId']}", headers=auth)
    record = fetched.json()["data"]
    assert record["name"] == "A"
    assert record["email"] == "a@x.com"


async def test_create_binds_scalar_types(client, auth, users_table):
    res = await client.post(
        "/tables/users",
        json={"name": "B", "email": None, "active": True},
        headers=auth,
    )
    assert res.status_code == 201
    row_id = res.json()["data"]["lastRowId"]
    record = (await client.get(f"/tables/users/{row_id}", headers=auth)).json()["data"]
    assert record["email"] is None
    assert record["active"] == 1


async def test_create_with_empty_body_is_400(client, auth, users_table):
    res = await client.post("/tables/users", json={}, headers=auth)
    assert res.status_code == 400
    assert res.json() == {"success": False, "error": "Request body is required"}


async def test_create_without_body_is_400(client, auth, users_table):
    res = await client.post("/tables/users", headers=auth)
    assert res.status_code == 400
    assert res.json()["error"] == "Request body is required"


@pytest.mark.parametrize("payload", [
    [{"name": "A"}],
    "name",
    {"name": {"first": "A"}},
    {"tags": ["a", "b"]},
])
async def test_create_rejects_non_scalar_bodies(client, auth, users_table, payload):
    res = await client.post("/tables/users", json=payload, headers=auth)
    assert res.status_code == 400
    body = res.json()
    assert body["success"] is False
    assert body["error"] == "Invalid request data"
    assert body["meta"]["details"]


async def test_create_with_malformed_json_is_400(client, auth, users_table):
    res = await client.post(
        "/tables/users",
        content=b'{"name": ',
        headers={**auth, "Content-Type": "application/json"},
    )
    assert res.status_code == 400
    assert res.json()["error"] == "Invalid request data"


async def test_create_unknown_column_surfaces_engine_message(client, auth, users_table):
    res = await client.post("/tables/users", json={"nope": 1}, headers=auth)
    assert res.status_code == 500
    assert "nope" in res.json()["error"]


async def test_create_constraint_violation_is_500(client, auth, users_table):
    res = await client.post(
        "/tables/users", json={"name": "Dup", "email": "ada@example.com"}, headers=auth,
    )
    assert res.status_code == 500
    assert "UNIQUE constraint failed" in res.json()["error"]


async def test_create_with_out_of_range_integer_is_execution_error(client, auth, users_table):
    res = await client.post(
        "/tables/users", json={"name": "Big", "active": 10**20}, headers=auth,
    )
    assert res.status_code == 500
    assert "too large" in res.json()["error"]


async def test_create_accepts_json_posted_as_form(client, auth, users_table):
    res = await client.post(
        "/tables/users",
        content=b'{"name": "Form"}',
        headers={**auth, "Content-Type": "application/x-www-form-urlencoded"},
    )
    assert res.status_code == 201
    row_id = res.json()["data"]["lastRowId"]
    record = (await client.get(f"/tables/users/{row_id}", headers=auth)).json()["data"]
    assert record["name"] == "Form"


async def test_create_without_content_type_reads_json(client, auth, users_table):
    res = await client.post(
        "/tables/users", content=b'{"name": "Bare"}', headers=auth,
    )
    assert res.status_code == 201


# ─── update ──────────────────────────────────────────────────────

async def test_update_existing_record(client, auth, users_table):
    res = await client.put("/tables/users/1", json={"name": "Ada L."}, headers=auth)
    assert res.status_code == 200
    assert res.json() == {"success": True, "data": {"changes": 1}}

    record = (await client.get("/tables/users/1", headers=auth)).json()["data"]
    assert record["name"] == "Ada L."


async def test_update_missing_record_is_404(client, auth, users_table):
    res = await client.put(
        "/tables/users/999999", json={"name": "Nobody"}, headers=auth,
    )
    assert res.status_code == 404
    assert res.json() == {"success": False, "error": "Record not found"}


async def test_update_with_empty_body_is_400(client, auth, users_table):
    res = await client.put("/tables/users/1", json={}, headers=auth)
    assert res.status_code == 400
    assert res.json()["error"] == "Request body is required"


async def test_update_accepts_json_posted_as_form(client, auth, users_table):
    res = await client.put(
        "/tables/users/2",
        content=b'{"active": 1}',
        headers={**auth, "Content-Type": "application/x-www-form-urlencoded"},
    )
    assert res.status_code == 200
    assert res.json()["data"] == {"changes": 1}


# ─── delete ──────────────────────────────────────────────────────

async def test_delete_existing_record(client, auth, users_table):
    res = await client.delete("/tables/users/2", headers=auth)
    assert res.status_code == 200
    assert res.json() == {"success": True, "data": {"changes": 1}}

    gone = await client.get("/tables/users/2", headers=auth)
    assert gone.status_code == 404


async def test_delete_missing_record_is_404(client, auth, users_table):
    res = await client.delete("/tables/users/999999", headers=auth)
    assert res.status_code == 404
    assert res.json() == {"success": False, "error": "Record not found"}


# ─── table name validation ───────────────────────────────────────

@pytest.mark.parametrize("method, path, payload", [
    ("GET", "/tables/1users", None),
    ("GET", "/tables/users%3Bdrop/1", None),
    ("POST", "/tables/bad-name", {"name": "x"}),
    ("PUT", "/tables/bad.name/1", {"name": "x"}),
    ("DELETE", "/tables/9lives/1", None),
])
async def test_invalid_table_name_is_400(client, auth, method, path, payload):
    res = await client.request(method, path, json=payload, headers=auth)
    assert res.status_code == 400
    assert res.json() == {"success": False, "error": "Invalid table name"}


async def test_invalid_table_name_wins_over_bad_body(client, auth):
    res = await client.post("/tables/1bad", json=[1, 2], headers=auth)
    assert res.status_code == 400
    assert res.json()["error"] == "Invalid table name"


# ─── CORS on responses ───────────────────────────────────────────

async def test_success_and_error_responses_carry_cors(client, auth, users_table):
    ok = await client.get("/tables", headers=auth)
    missing = await client.get("/tables/users/999", headers=auth)
    for res in (ok, missing):
        assert res.headers["access-control-allow-origin"] == "*"
        assert res.headers["access-control-allow-methods"] == (
            "GET, POST, PUT, DELETE, OPTIONS"
        )
        assert "X-API-Key" in res.headers["access-control-allow-headers"]
        assert res.headers["content-type"].startswith("application/json")


# ─── binary values ───────────────────────────────────────────────

async def test_blob_values_render_as_byte_lists(client, auth, database):
    await database.execute(Statement(
        "CREATE TABLE files (id INTEGER PRIMARY KEY, payload BLOB)",
    ))
    await database.execute(Statement(
        "INSERT INTO files (payload) VALUES (?)", (b"\xff\xfe\x00",),
    ))

    listed = await client.get("/tables/files", headers=auth)
    assert listed.status_code == 200
    assert listed.json()["data"] == [{"id": 1, "payload": [255, 254, 0]}]

    one = await client.get("/tables/files/1", headers=auth)
    assert one.json()["data"] == {"id": 1, "payload": [255, 254, 0]}
