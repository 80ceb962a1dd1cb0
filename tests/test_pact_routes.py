"""Tests for the pact endpoints."""

from __future__ import annotations

from flask_jwt_extended import create_access_token

from models import db
from models.user import User


def _create_user(name: str, email: str) -> int:
    user = User(name=name, email=email, password_hash="hash", is_verified=True)
    db.session.add(user)
    db.session.commit()
    return user.id


def _auth_header(app, user_id: int) -> dict[str, str]:
    with app.app_context():
        token = create_access_token(identity=str(user_id))
    return {"Authorization": f"Bearer {token}"}


def test_pact_requires_jwt(client):
    assert client.get("/pact").status_code == 401
    assert client.post("/pact", json={"email": "b@x.com"}).status_code == 401
    assert client.delete("/pact", json={"email": "b@x.com"}).status_code == 401


def test_add_list_and_remove(app, client):
    with app.app_context():
        alice_id = _create_user("Alice", "a@x.com")
        bob_id = _create_user("Bob", "b@x.com")
    headers = _auth_header(app, alice_id)

    empty = client.get("/pact", headers=headers)
    assert empty.status_code == 200
    assert empty.get_json() == {"pact": []}

    added = client.post("/pact", json={"email": "b@x.com"}, headers=headers)
    assert added.status_code == 200
    assert added.get_json() == {
        "user_added_id": bob_id,
        "pact": [{"id": bob_id, "name": "Bob", "email": "b@x.com"}],
    }

    listed = client.get("/pact", headers=headers)
    assert listed.get_json()["pact"] == [{"id": bob_id, "name": "Bob", "email": "b@x.com"}]

    removed = client.delete("/pact", json={"email": "b@x.com"}, headers=headers)
    assert removed.status_code == 200
    assert removed.get_json() == {"message": "User removed from pact."}
    assert client.get("/pact", headers=headers).get_json() == {"pact": []}


def test_add_errors(app, client):
    with app.app_context():
        alice_id = _create_user("Alice", "a@x.com")
        _create_user("Bob", "b@x.com")
    headers = _auth_header(app, alice_id)

    missing = client.post("/pact", json={}, headers=headers)
    assert missing.status_code == 400
    assert missing.get_json()["detail"] == "Please enter email."

    unknown = client.post("/pact", json={"email": "ghost@x.com"}, headers=headers)
    assert unknown.status_code == 404
    assert unknown.get_json()["detail"] == "User not found."

    itself = client.post("/pact", json={"email": "a@x.com"}, headers=headers)
    assert itself.status_code == 400
    assert itself.get_json()["detail"] == "Invalid email."

    client.post("/pact", json={"email": "b@x.com"}, headers=headers)
    duplicate = client.post("/pact", json={"email": "b@x.com"}, headers=headers)
    assert duplicate.status_code == 409
    assert duplicate.get_json()["detail"] == "User is already in pact."
    assert len(client.get("/pact", headers=headers).get_json()["pact"]) == 1


def test_remove_errors(app, client):
    with app.app_context():
        alice_id = _create_user("Alice", "a@x.com")
        _create_user("Bob", "b@x.com")
    headers = _auth_header(app, alice_id)

    unknown = client.delete("/pact", json={"email": "ghost@x.com"}, headers=headers)
    assert unknown.status_code == 404
    assert unknown.get_json()["detail"] == "User not found."

    not_in_pact = client.delete("/pact", json={"email": "b@x.com"}, headers=headers)
    assert not_in_pact.status_code == 404
    assert not_in_pact.get_json()["detail"] == "User not in pact."


def test_deleted_caller_gets_not_found(app, client):
    with app.app_context():
        alice_id = _create_user("Alice", "a@x.com")
    headers = _auth_header(app, alice_id)
    with app.app_context():
        db.session.delete(db.session.get(User, alice_id))
        db.session.commit()

    response = client.get("/pact", headers=headers)

    assert response.status_code == 404
