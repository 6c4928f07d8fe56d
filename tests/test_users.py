"""
Feature: Profiles and user search
  As an authenticated user
  I want to see my profile, find other users and view their notes

Scenario: Own profile
  When I request my profile
  Then my data is returned without the password

Scenario: Profile of a deleted account
  Given my account no longer exists
  When I request my profile
  Then the system returns 404

Scenario: Search users
  When I search for part of a username
  Then matching users other than me are returned, case insensitive, at most 10

Scenario: Public profile
  When I open another user's profile
  Then their public data and notes are returned, newest first
  And their email is not exposed
"""

from datetime import datetime, timedelta, timezone

from models.notes import Note


def test_get_own_profile(client, make_user, auth_headers):
    alice = make_user("alice")

    response = client.get("/api/profile", headers=auth_headers(alice))

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == alice.id
    assert data["username"] == "alice"
    assert data["email"] == "alice@x.com"
    assert "hashed_password" not in data
    assert "password" not in data


def test_get_profile_of_missing_user(client, make_user, auth_headers, session):
    alice = make_user("alice")
    headers = auth_headers(alice)
    session.delete(alice)
    session.commit()

    response = client.get("/api/profile", headers=headers)

    assert response.status_code == 404
    assert response.json()["detail"] == "User not found."


def test_search_is_case_insensitive_and_excludes_self(client, make_user, auth_headers):
    alice = make_user("alice")
    make_user("Alicia")
    make_user("bob")

    response = client.get("/api/users/search", params={"q": "ALI"}, headers=auth_headers(alice))

    assert response.status_code == 200
    assert [user["username"] for user in response.json()] == ["Alicia"]


def test_search_limits_results(client, make_user, auth_headers):
    caller = make_user("caller")
    for i in range(12):
        make_user(f"user{i:02d}")

    response = client.get("/api/users/search", params={"q": "user"}, headers=auth_headers(caller))

    assert len(response.json()) == 10


def test_search_treats_query_literally(client, make_user, auth_headers):
    caller = make_user("caller")
    make_user("bob")

    response = client.get("/api/users/search", params={"q": "b%b"}, headers=auth_headers(caller))

    assert response.json() == []


def test_search_without_query_returns_empty(client, make_user, auth_headers):
    alice = make_user("alice")
    make_user("bob")

    response = client.get("/api/users/search", headers=auth_headers(alice))

    assert response.status_code == 200
    assert response.json() == []


def test_public_profile_with_notes(client, session, make_user, auth_headers):
    alice = make_user("alice")
    bob = make_user("bob")
    now = datetime.now(timezone.utc)
    session.add_all([
        Note(title="Old", user_id=bob.id, created_at=now - timedelta(hours=1)),
        Note(title="New", user_id=bob.id, created_at=now),
        Note(title="Alice's", user_id=alice.id, created_at=now),
    ])
    session.commit()

    response = client.get("/api/users/profile/bob", headers=auth_headers(alice))

    assert response.status_code == 200
    data = response.json()
    assert data["user"]["username"] == "bob"
    assert "email" not in data["user"]
    assert "hashed_password" not in data["user"]
    assert [note["title"] for note in data["notes"]] == ["New", "Old"]


def test_public_profile_unknown_user(client, make_user, auth_headers):
    alice = make_user("alice")

    response = client.get("/api/users/profile/ghost", headers=auth_headers(alice))

    assert response.status_code == 404
