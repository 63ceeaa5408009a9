# mypy: ignore-errors
# tests/v1/test_post_listing.py
"""Tests for listing posts with filters, lookups and paging."""

import pytest
from fastapi import status


@pytest.fixture()
def feed(alice, bob, category, category_factory, post_factory, comment_factory):
    """Three posts: alice in Cats, bob in Dogs, alice in Dogs (newest)."""
    dogs = category_factory("Dogs", "dogs")
    first = post_factory(alice, category, "First")
    second = post_factory(bob, dogs, "Second")
    third = post_factory(alice, dogs, "Third")
    comment_factory(first, bob, "First comment")
    comment_factory(first, alice, "Second comment")
    return {"dogs": dogs, "first": first, "second": second, "third": third}


def _titles(response):
    assert response.status_code == status.HTTP_200_OK, response.json()
    return [p["title"] for p in response.json()]


def test_list_newest_first(client, feed, auth_headers) -> None:
    assert _titles(client.get("/posts", headers=auth_headers)) == ["Third", "Second", "First"]


def test_list_includes_comment_ids_in_append_order(client, feed, auth_headers) -> None:
    posts = client.get("/posts", headers=auth_headers).json()
    first = next(p for p in posts if p["title"] == "First")
    assert len(first["comments"]) == 2
    assert first["comments"] == sorted(first["comments"])


def test_list_limit_and_skip(client, feed, auth_headers) -> None:
    assert _titles(client.get("/posts?limit=2", headers=auth_headers)) == ["Third", "Second"]
    assert _titles(client.get("/posts?skip=1&limit=1", headers=auth_headers)) == ["Second"]
    assert _titles(client.get("/posts?skip=5", headers=auth_headers)) == []


def test_list_rejects_bad_paging(client, auth_headers) -> None:
    response = client.get("/posts?limit=ten", headers=auth_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"detail": "Limit query parameter must be an integer"}

    response = client.get("/posts?skip=-1", headers=auth_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"detail": "Skip query parameter must be an integer"}


def test_list_rejects_paging_beyond_integer_range(client, auth_headers) -> None:
    response = client.get("/posts?limit=99999999999999999999", headers=auth_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"detail": "Limit query parameter must be an integer"}

    response = client.get("/posts", params={"skip": "²"}, headers=auth_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"detail": "Skip query parameter must be an integer"}


def test_filter_yours(client, feed, auth_headers) -> None:
    assert _titles(client.get("/posts?filter=yours", headers=auth_headers)) == ["Third", "First"]


def test_filter_liked(client, feed, bob, auth_headers) -> None:
    client.put(f"/posts/{feed['second'].slug}/like", json={"user": feed["first"].author_id}, headers=auth_headers)
    client.put(f"/posts/{feed['third'].slug}/dislike", json={"user": feed["first"].author_id}, headers=auth_headers)
    assert _titles(client.get("/posts?filter=liked", headers=auth_headers)) == ["Second", "First"]


def test_filter_following(client, feed, bob, auth_headers) -> None:
    assert _titles(client.get("/posts?filter=following", headers=auth_headers)) == []
    client.put("/users/alice/update_user", json={"user_id": bob.id}, headers=auth_headers)
    assert _titles(client.get("/posts?filter=following", headers=auth_headers)) == ["Second"]


def test_filter_categories(client, feed, auth_headers) -> None:
    client.put("/users/alice/update_category", json={"category_id": feed["dogs"].id}, headers=auth_headers)
    assert _titles(client.get("/posts?filter=categories", headers=auth_headers)) == ["Third", "Second"]


def test_invalid_filter(client, auth_headers) -> None:
    response = client.get("/posts?filter=popular", headers=auth_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"detail": "Invalid filter query parameter"}


def test_category_lookup(client, feed, auth_headers) -> None:
    assert _titles(client.get("/posts?category=dogs", headers=auth_headers)) == ["Third", "Second"]

    response = client.get("/posts?category=birds", headers=auth_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"detail": "Invalid category query parameter"}


def test_user_lookup(client, feed, auth_headers) -> None:
    assert _titles(client.get("/posts?user=bob", headers=auth_headers)) == ["Second"]

    response = client.get("/posts?user=ghost", headers=auth_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"detail": "Invalid user query parameter"}


def test_precedence_user_over_category_over_filter(client, feed, auth_headers) -> None:
    assert _titles(client.get("/posts?user=bob&category=cats&filter=yours", headers=auth_headers)) == ["Second"]
    assert _titles(client.get("/posts?category=cats&filter=following", headers=auth_headers)) == ["First"]


def test_unused_parameters_are_still_validated(client, feed, auth_headers) -> None:
    response = client.get("/posts?user=bob&category=birds", headers=auth_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"detail": "Invalid category query parameter"}
