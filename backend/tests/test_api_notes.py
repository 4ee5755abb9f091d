from uuid import uuid4

import pytest


@pytest.fixture
def folder(client, alice_headers):
    return client.post("/api/folders", json={"name": "Work"}, headers=alice_headers).json()


@pytest.fixture
def tag(client, alice_headers):
    return client.post("/api/tags", json={"name": "urgent"}, headers=alice_headers).json()


def _create(client, headers, **body):
    return client.post("/api/notes", json=body, headers=headers)


def test_create_note(client, alice_headers, alice_id, folder, tag):
    response = _create(
        client, alice_headers, title="5 ways to relax", content="Nap.", folderId=folder["id"], tags=[tag["id"]]
    )

    assert response.status_code == 201
    note = response.json()
    assert response.headers["location"] == f"/api/notes/{note['id']}"
    assert note["title"] == "5 ways to relax"
    assert note["folderId"] == folder["id"]
    assert note["userId"] == str(alice_id)
    assert [t["name"] for t in note["tags"]] == ["urgent"]
    assert set(note) >= {"createdAt", "updatedAt"}


@pytest.mark.parametrize(
    "body, error",
    [
        ({"content": "no title"}, "missing_field"),
        ({"title": "   "}, "missing_field"),
        ({"title": "x", "folderId": "12345"}, "invalid_reference"),
        ({"title": "x", "folderId": 123}, "invalid_reference"),
        ({"title": "x", "folderId": ["nested"]}, "invalid_reference"),
        ({"title": "x", "tags": "not-a-list"}, "invalid_shape"),
        ({"title": "x", "tags": None}, "invalid_shape"),
        ({"title": "x", "tags": ["nope"]}, "invalid_reference"),
        ({"title": "x", "tags": [str(uuid4())]}, "invalid_reference"),
    ],
)
def test_create_note_rejects_bad_input(client, alice_headers, body, error):
    response = _create(client, alice_headers, **body)
    assert response.status_code == 400
    assert response.json()["error"] == error


def test_folder_error_reported_before_tag_error(client, alice_headers):
    response = _create(client, alice_headers, title="x", folderId="bad", tags="bad")
    assert response.status_code == 400
    assert response.json()["message"] == "The `folderId` is invalid"


def test_notes_are_private(client, alice_headers, bob_headers):
    note = _create(client, alice_headers, title="Diary").json()

    assert client.get(f"/api/notes/{note['id']}", headers=bob_headers).status_code == 404
    assert client.get("/api/notes", headers=bob_headers).json() == []
    update = client.put(f"/api/notes/{note['id']}", json={"title": "Hacked"}, headers=bob_headers)
    assert update.status_code == 404
    assert client.delete(f"/api/notes/{note['id']}", headers=bob_headers).status_code == 204
    assert client.get(f"/api/notes/{note['id']}", headers=alice_headers).json()["title"] == "Diary"


def test_cannot_reference_another_users_folder(client, alice_headers, bob_headers):
    bobs = client.post("/api/folders", json={"name": "Bob's"}, headers=bob_headers).json()
    response = _create(client, alice_headers, title="x", folderId=bobs["id"])
    assert response.status_code == 400
    assert response.json()["error"] == "invalid_reference"


def test_update_note(client, alice_headers, folder, tag):
    note = _create(client, alice_headers, title="Draft", content="body", folderId=folder["id"], tags=[tag["id"]]).json()

    response = client.put(
        f"/api/notes/{note['id']}", json={"title": "Final", "folderId": folder["id"]}, headers=alice_headers
    )

    assert response.status_code == 200
    updated = response.json()
    assert updated["title"] == "Final"
    assert updated["content"] == "body"
    assert updated["folderId"] == folder["id"]
    assert [t["id"] for t in updated["tags"]] == [tag["id"]]


def test_update_requires_title(client, alice_headers):
    note = _create(client, alice_headers, title="Keep me").json()
    response = client.put(f"/api/notes/{note['id']}", json={"title": "", "content": "new"}, headers=alice_headers)
    assert response.status_code == 400
    assert response.json()["message"] == "Missing `title` in request body"


def test_malformed_ids(client, alice_headers):
    assert client.get("/api/notes/not-a-uuid", headers=alice_headers).status_code == 400
    assert client.put("/api/notes/not-a-uuid", json={"title": "x"}, headers=alice_headers).status_code == 400
    assert client.delete("/api/notes/not-a-uuid", headers=alice_headers).status_code == 400
    response = client.get("/api/notes", params={"folderId": "nope"}, headers=alice_headers)
    assert response.status_code == 400
    assert response.json() == {"error": "invalid_id", "message": "The `folderId` is invalid"}


def test_unknown_note(client, alice_headers):
    missing = uuid4()
    assert client.get(f"/api/notes/{missing}", headers=alice_headers).status_code == 404
    assert client.put(f"/api/notes/{missing}", json={"title": "x"}, headers=alice_headers).status_code == 404


def test_delete_twice(client, alice_headers):
    note = _create(client, alice_headers, title="Short lived").json()
    assert client.delete(f"/api/notes/{note['id']}", headers=alice_headers).status_code == 204
    assert client.delete(f"/api/notes/{note['id']}", headers=alice_headers).status_code == 204
    assert client.get(f"/api/notes/{note['id']}", headers=alice_headers).status_code == 404


def test_search_and_filters(client, alice_headers, folder, tag):
    _create(client, alice_headers, title="7 ways to be happy", folderId=folder["id"], tags=[tag["id"]])
    _create(client, alice_headers, title="Cats", content="They always win", folderId=folder["id"])
    _create(client, alice_headers, title="Dogs")

    def titles(**params):
        response = client.get("/api/notes", params=params, headers=alice_headers)
        assert response.status_code == 200
        return {n["title"] for n in response.json()}

    assert titles(searchTerm="WAYS") == {"7 ways to be happy", "Cats"}
    assert titles(folderId=folder["id"]) == {"7 ways to be happy", "Cats"}
    assert titles(tagId=tag["id"]) == {"7 ways to be happy"}
    assert titles(searchTerm="dog", folderId=folder["id"]) == set()
    assert len(titles()) == 3


def test_long_title_and_content(client, alice_headers):
    created = _create(client, alice_headers, title="T" * 300, content="c" * 50_000)
    assert created.status_code == 201
    note = created.json()
    assert note["title"] == "T" * 300
    assert len(note["content"]) == 50_000

    updated = client.put(f"/api/notes/{note['id']}", json={"title": "U" * 1000}, headers=alice_headers)
    assert updated.status_code == 200
    assert updated.json()["title"] == "U" * 1000
