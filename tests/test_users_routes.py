"""User CRUD endpoints."""
import pytest

from technotes.core.security import PasswordHasher


def test_list_users_omits_passwords(client, db, auth_headers):
    db.add_user("alice", roles=["Employee"])
    db.add_user("bob", roles=["Manager", "Admin"])

    response = client.get("/users", headers=auth_headers)

    assert response.status_code == 200
    body = response.json()
    assert [user["username"] for user in body] == ["alice", "bob"]
    assert body[1]["roles"] == ["Manager", "Admin"]
    assert all("password" not in key for user in body for key in user)


def test_list_users_empty_is_bad_request(client, auth_headers):
    response = client.get("/users", headers=auth_headers)

    assert response.status_code == 400
    assert response.json() == {"message": "No users found"}


def test_users_require_bearer_token(client):
    assert client.post("/users", json={}).status_code == 401


def test_create_user_hashes_password(client, db, auth_headers):
    response = client.post(
        "/users",
        headers=auth_headers,
        json={"username": "carol", "password": "carol-pass", "roles": ["Employee"]},
    )

    assert response.status_code == 201
    assert response.json() == {"message": "New user carol created"}
    login = client.post("/auth", json={"username": "carol", "password": "carol-pass"})
    assert login.status_code == 200


@pytest.mark.parametrize(
    "payload",
    [
        {"password": "p", "roles": ["Employee"]},
        {"username": "u", "roles": ["Employee"]},
        {"username": "u", "password": "p"},
        {"username": "u", "password": "p", "roles": []},
    ],
)
def test_create_user_requires_fields(client, auth_headers, payload):
    response = client.post("/users", headers=auth_headers, json=payload)

    assert response.status_code == 400
    assert response.json() == {"message": "All fields are required"}


def test_create_user_rejects_unknown_role(client, auth_headers):
    response = client.post(
        "/users",
        headers=auth_headers,
        json={"username": "u", "password": "p", "roles": ["Overlord"]},
    )

    assert response.status_code == 400


def test_duplicate_username_conflicts(client, auth_headers):
    payload = {"username": "dup", "password": "p", "roles": ["Employee"]}
    assert client.post("/users", headers=auth_headers, json=payload).status_code == 201

    response = client.post("/users", headers=auth_headers, json=payload)

    assert response.status_code == 409
    assert response.json() == {"message": "Duplicate username"}


def test_update_user_without_password_keeps_hash(client, db, auth_headers):
    user = db.add_user("dana", password="dana-pass")
    original_hash = user.password_hash

    response = client.patch(
        "/users",
        headers=auth_headers,
        json={"id": user.id, "username": "dana2", "roles": ["Manager"], "active": False},
    )

    assert response.status_code == 200
    assert response.json() == {"message": "dana2 updated"}
    stored = db.get_user(user.id)
    assert stored.username == "dana2"
    assert stored.roles == ["Manager"]
    assert stored.active is False
    assert stored.password_hash == original_hash


def test_update_user_with_password_rehashes(client, db, auth_headers):
    user = db.add_user("ed", password="old-pass")

    client.patch(
        "/users",
        headers=auth_headers,
        json={"id": user.id, "username": "ed", "password": "new-pass", "roles": ["Employee"], "active": True},
    )

    stored = db.get_user(user.id)
    assert PasswordHasher.verify("new-pass", stored.password_hash)
    assert not PasswordHasher.verify("old-pass", stored.password_hash)


def test_update_user_to_taken_username_conflicts(client, db, auth_headers):
    db.add_user("taken")
    user = db.add_user("free")

    response = client.patch(
        "/users",
        headers=auth_headers,
        json={"id": user.id, "username": "taken", "roles": ["Employee"], "active": True},
    )

    assert response.status_code == 409
    assert db.get_user(user.id).username == "free"


def test_update_user_validation(client, db, auth_headers):
    user = db.add_user("fay")

    no_roles = client.patch(
        "/users", headers=auth_headers, json={"id": user.id, "username": "fay", "roles": [], "active": True}
    )
    no_active = client.patch(
        "/users", headers=auth_headers, json={"id": user.id, "username": "fay", "roles": ["Employee"]}
    )
    unknown = client.patch(
        "/users", headers=auth_headers, json={"id": 999, "username": "fay", "roles": ["Employee"], "active": True}
    )

    assert no_roles.json() == {"message": "All fields are required"}
    assert no_active.json() == {"message": "All fields are required"}
    assert unknown.status_code == 400
    assert unknown.json() == {"message": "User not found"}


def test_user_with_notes_cannot_be_deleted(client, db, auth_headers):
    user = db.add_user("gus")
    note = db.add_note(user.id, "Assigned")

    blocked = client.request("DELETE", "/users", headers=auth_headers, json={"id": user.id})

    assert blocked.status_code == 400
    assert blocked.json() == {"message": "User has assigned notes"}
    assert db.get_user(user.id) is not None

    client.request("DELETE", "/notes", headers=auth_headers, json={"id": note.id})
    response = client.request("DELETE", "/users", headers=auth_headers, json={"id": user.id})

    assert response.status_code == 200
    assert response.json() == f"Username gus with ID {user.id} deleted successfully"
    assert db.get_user(user.id) is None


def test_delete_user_errors(client, auth_headers):
    missing_id = client.request("DELETE", "/users", headers=auth_headers, json={})
    unknown = client.request("DELETE", "/users", headers=auth_headers, json={"id": 5})

    assert missing_id.json() == {"message": "User ID required"}
    assert unknown.json() == {"message": "User not found"}
