"""Test the /api/books HTTP contract end to end."""
import pytest

BOOKS = "/api/books"


async def _create(client, payload) -> dict:
    resp = await client.post(BOOKS, json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json()


# ---------------------------------------------------------------------------
# GET /books
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_list_empty(client):
    resp = await client.get(BOOKS)
    assert resp.status_code == 200
    assert resp.json() == []


@pytest.mark.asyncio
async def test_list_returns_created_books(client, dune):
    first = await _create(client, dune)
    second = await _create(client, {**dune, "title": "Dune Messiah"})

    resp = await client.get(BOOKS)
    assert resp.status_code == 200
    assert sorted(resp.json(), key=lambda b: b["id"]) == [first, second]


# ---------------------------------------------------------------------------
# POST /books
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_create_then_get_round_trip(client, dune):
    resp = await client.post(BOOKS, json=dune)
    assert resp.status_code == 201
    created = resp.json()
    assert isinstance(created["id"], int)
    assert {k: v for k, v in created.items() if k != "id"} == dune

    fetched = await client.get(f"{BOOKS}/{created['id']}")
    assert fetched.status_code == 200
    assert fetched.json() == created


@pytest.mark.asyncio
async def test_create_sets_location_header(client, dune):
    resp = await client.post(BOOKS, json=dune)
    book_id = resp.json()["id"]
    assert resp.headers["location"] == f"http://testserver{BOOKS}/{book_id}"


@pytest.mark.asyncio
async def test_create_ignores_body_id(client, dune):
    created = await _create(client, {**dune, "id": 77})
    assert created["id"] != 77


@pytest.mark.asyncio
async def test_create_invalid_isbn_returns_400(client, dune):
    resp = await client.post(BOOKS, json={**dune, "isbn": "123"})
    assert resp.status_code == 400
    body = resp.json()
    assert body["status"] == 400
    assert list(body["errors"]) == ["isbn"]
    assert "pattern" in body["errors"]["isbn"][0]


@pytest.mark.asyncio
async def test_create_reports_every_violation(client):
    resp = await client.post(BOOKS, json={"title": "x" * 201, "price": -5})
    assert resp.status_code == 400
    assert set(resp.json()["errors"]) == {"title", "author", "isbn", "price", "genre"}


@pytest.mark.asyncio
async def test_create_invalid_payload_persists_nothing(client, dune):
    await client.post(BOOKS, json={**dune, "price": 0})
    resp = await client.get(BOOKS)
    assert resp.json() == []


# ---------------------------------------------------------------------------
# GET /books/{id}
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_get_missing_returns_404_empty_body(client):
    resp = await client.get(f"{BOOKS}/12345")
    assert resp.status_code == 404
    assert resp.content == b""


@pytest.mark.asyncio
async def test_get_non_integer_id_returns_400(client):
    resp = await client.get(f"{BOOKS}/abc")
    assert resp.status_code == 400
    assert "book_id" in resp.json()["errors"]


# ---------------------------------------------------------------------------
# PUT /books/{id}
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_update_replaces_record(client, dune):
    created = await _create(client, dune)
    replacement = {
        "title": "Dune Messiah",
        "author": "Frank Herbert",
        "isbn": "9780593098233",
        "price": 9.5,
        "genre": "Fiction",
    }

    resp = await client.put(f"{BOOKS}/{created['id']}", json=replacement)
    assert resp.status_code == 204
    assert resp.content == b""

    fetched = (await client.get(f"{BOOKS}/{created['id']}")).json()
    assert fetched == {"id": created["id"], **replacement}


@pytest.mark.asyncio
async def test_update_with_matching_body_id(client, dune):
    created = await _create(client, dune)
    resp = await client.put(
        f"{BOOKS}/{created['id']}", json={**dune, "id": created["id"], "genre": "Classic"}
    )
    assert resp.status_code == 204


@pytest.mark.asyncio
async def test_update_id_mismatch_returns_400(client, dune):
    created = await _create(client, dune)
    resp = await client.put(f"{BOOKS}/{created['id']}", json={**dune, "id": created["id"] + 1})
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_update_mismatch_on_path_5_body_7(client, dune):
    resp = await client.put(f"{BOOKS}/5", json={**dune, "id": 7})
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_update_missing_returns_404(client, dune):
    resp = await client.put(f"{BOOKS}/999", json=dune)
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_update_invalid_payload_returns_400_and_keeps_record(client, dune):
    created = await _create(client, dune)
    resp = await client.put(f"{BOOKS}/{created['id']}", json={**dune, "isbn": "123"})
    assert resp.status_code == 400
    assert "isbn" in resp.json()["errors"]

    fetched = (await client.get(f"{BOOKS}/{created['id']}")).json()
    assert fetched == created


@pytest.mark.asyncio
async def test_update_is_idempotent(client, dune):
    created = await _create(client, dune)
    payload = {**dune, "price": 15.0}

    for _ in range(2):
        resp = await client.put(f"{BOOKS}/{created['id']}", json=payload)
        assert resp.status_code == 204

    fetched = (await client.get(f"{BOOKS}/{created['id']}")).json()
    assert fetched == {"id": created["id"], **payload}


# ---------------------------------------------------------------------------
# DELETE /books/{id}
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_delete_then_delete_again(client, dune):
    created = await _create(client, dune)

    resp = await client.delete(f"{BOOKS}/{created['id']}")
    assert resp.status_code == 204
    assert resp.content == b""

    assert (await client.get(f"{BOOKS}/{created['id']}")).status_code == 404
    assert (await client.delete(f"{BOOKS}/{created['id']}")).status_code == 404


@pytest.mark.asyncio
async def test_delete_missing_returns_404(client):
    resp = await client.delete(f"{BOOKS}/31337")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_deleted_book_gone_from_list(client, dune):
    keep = await _create(client, dune)
    drop = await _create(client, {**dune, "title": "Children of Dune"})

    await client.delete(f"{BOOKS}/{drop['id']}")
    assert (await client.get(BOOKS)).json() == [keep]


@pytest.mark.asyncio
async def test_huge_id_returns_404(client, dune):
    huge = f"{BOOKS}/{2**63}"
    assert (await client.get(huge)).status_code == 404
    assert (await client.put(huge, json=dune)).status_code == 404
    assert (await client.delete(huge)).status_code == 404


@pytest.mark.asyncio
async def test_price_at_max_precision_round_trips(client, dune):
    created = await _create(client, {**dune, "price": 1234567890123.45})
    assert created["price"] == 1234567890123.45

    fetched = (await client.get(f"{BOOKS}/{created['id']}")).json()
    assert fetched == created


@pytest.mark.asyncio
async def test_update_mismatched_and_invalid_reports_validation_errors(client, dune):
    created = await _create(client, dune)
    resp = await client.put(
        f"{BOOKS}/{created['id']}", json={**dune, "id": created["id"] + 1, "isbn": "123"}
    )
    assert resp.status_code == 400
    body = resp.json()
    assert list(body["errors"]) == ["isbn"]
    assert "detail" not in body


@pytest.mark.asyncio
async def test_validation_error_carries_request_id(client, dune):
    resp = await client.post(
        BOOKS, json={**dune, "isbn": "123"}, headers={"X-Request-ID": "trace-42"}
    )
    assert resp.status_code == 400
    assert resp.json()["traceId"] == "trace-42"
