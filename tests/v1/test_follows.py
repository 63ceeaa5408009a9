# mypy: ignore-errors
# tests/v1/test_follows.py
"""Tests for following users and categories."""

from fastapi import status

from aurora.models import UserFollow


def test_follow_and_unfollow_user(client, alice, bob, auth_headers) -> None:
    response = client.put("/users/alice/update_user", json={"user_id": bob.id}, headers=auth_headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["followed_users"] == [bob.id]

    followers = client.get("/users/bob", headers=auth_headers).json()["followers_count"]
    assert followers == 1

    response = client.put("/users/alice/update_user", json={"user_id": bob.id}, headers=auth_headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["followed_users"] == []


def test_follow_user_accepts_string_id(client, bob, auth_headers) -> None:
    response = client.put(
        "/users/alice/update_user",
        json={"user_id": str(bob.id)},
        headers=auth_headers,
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["followed_users"] == [bob.id]


def test_cannot_follow_yourself(client, alice, auth_headers, db_session) -> None:
    response = client.put("/users/alice/update_user", json={"user_id": alice.id}, headers=auth_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"detail": "You cannot follow yourself"}
    assert db_session.query(UserFollow).count() == 0


def test_follow_unknown_user(client, auth_headers) -> None:
    response = client.put("/users/alice/update_user", json={"user_id": 9999}, headers=auth_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {
        "detail": "Error while following/unfollowing a user. Please try again",
    }


def test_follow_user_invalid_id(client, auth_headers) -> None:
    response = client.put("/users/alice/update_user", json={"user_id": "abc"}, headers=auth_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"detail": "User must be a valid ID"}


def test_follow_ids_beyond_integer_range(client, auth_headers) -> None:
    response = client.put("/users/alice/update_user", json={"user_id": 10**20}, headers=auth_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"detail": "User must be a valid ID"}

    response = client.put("/users/alice/update_category", json={"category_id": "²"}, headers=auth_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"detail": "Category must be a valid ID"}


def test_follow_on_behalf_of_other_user_forbidden(client, bob, auth_headers) -> None:
    response = client.put("/users/bob/update_user", json={"user_id": 1}, headers=auth_headers)
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_follow_and_unfollow_category(client, category, auth_headers) -> None:
    response = client.put(
        "/users/alice/update_category",
        json={"category_id": category.id},
        headers=auth_headers,
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["followed_categories"] == [category.id]

    stats = client.get(f"/categories/{category.slug}", headers=auth_headers).json()
    assert stats["followers_count"] == 1

    response = client.put(
        "/users/alice/update_category",
        json={"category_id": category.id},
        headers=auth_headers,
    )
    assert response.json()["followed_categories"] == []


def test_follow_unknown_category(client, auth_headers) -> None:
    response = client.put("/users/alice/update_category", json={"category_id": 424242}, headers=auth_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {
        "detail": "Error while following/unfollowing a category. Please try again",
    }


def test_follow_category_invalid_id(client, auth_headers) -> None:
    response = client.put("/users/alice/update_category", json={}, headers=auth_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"detail": "Category must be a valid ID"}
