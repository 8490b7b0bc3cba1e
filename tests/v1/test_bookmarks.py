# mypy: ignore-errors
# tests/v1/test_bookmarks.py
"""Tests for bookmark endpoints."""

from fastapi import status


def test_bookmark_lifecycle(client, bob_headers, original) -> None:
    created = client.post("/api/v1/bookmarks/", json={"post_id": original.id}, headers=bob_headers)
    assert created.status_code == status.HTTP_201_CREATED
    bookmark = created.json()
    assert bookmark["post"]["id"] == original.id
    assert bookmark["post"]["bookmarks_count"] == 1
    assert bookmark["post"]["viewer"]["is_bookmarked_by_user"] is True

    listing = client.get("/api/v1/bookmarks/", headers=bob_headers)
    assert [b["id"] for b in listing.json()] == [bookmark["id"]]

    deleted = client.delete(f"/api/v1/bookmarks/{bookmark['id']}", headers=bob_headers)
    assert deleted.status_code == status.HTTP_204_NO_CONTENT
    assert client.get("/api/v1/bookmarks/", headers=bob_headers).json() == []
    post = client.get(f"/api/v1/posts/{original.id}", headers=bob_headers).json()
    assert post["bookmarks_count"] == 0


def test_duplicate_bookmark(client, bob_headers, original) -> None:
    client.post("/api/v1/bookmarks/", json={"post_id": original.id}, headers=bob_headers)
    response = client.post(
        "/api/v1/bookmarks/", json={"post_id": original.id}, headers=bob_headers
    )
    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["code"] == "conflict"


def test_bookmark_repost_is_not_found(client, carol_headers, repost) -> None:
    response = client.post("/api/v1/bookmarks/", json={"post_id": repost.id}, headers=carol_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_delete_unknown_bookmark(client, bob_headers) -> None:
    response = client.delete("/api/v1/bookmarks/12345", headers=bob_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "Bookmark not found"
