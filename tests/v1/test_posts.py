# mypy: ignore-errors
# tests/v1/test_posts.py
"""Tests for post-related endpoints."""

from fastapi import status


def test_create_post(client, alice_headers, alice) -> None:
    """Creating a post returns the full projection with zeroed counters."""
    response = client.post(
        "/api/v1/posts/",
        json={
            "body": "first post",
            "media": [
                {"type": "image", "link": "https://cdn.test/a.png", "storage_id": "a"}
            ],
        },
        headers=alice_headers,
    )
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["body"] == "first post"
    assert data["kind"] == "ORIGINAL"
    assert data["status"] == "PUBLISHED"
    assert data["parent"] is None
    assert data["likes_count"] == 0
    assert data["bookmarks_count"] == 0
    assert data["media"][0]["storage_id"] == "a"
    assert data["author"] == {
        "id": alice.id,
        "username": "alice",
        "display_name": "Alice",
        "profile_pic": None,
    }
    assert data["viewer"] == {
        "is_liked_by_user": False,
        "is_disliked_by_user": False,
        "is_reposted_by_user": False,
        "is_bookmarked_by_user": False,
    }


def test_create_post_requires_auth(client) -> None:
    response = client.post("/api/v1/posts/", json={"body": "anonymous"})
    assert response.status_code in {status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN}


def test_create_post_invalid_token(client) -> None:
    response = client.post(
        "/api/v1/posts/",
        json={"body": "forged"},
        headers={"Authorization": "Bearer not-a-jwt"},
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_create_post_too_long(client, alice_headers) -> None:
    response = client.post("/api/v1/posts/", json={"body": "x" * 301}, headers=alice_headers)
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert response.json()["code"] == "validation_failure"


def test_create_post_empty(client, alice_headers) -> None:
    response = client.post("/api/v1/posts/", json={"body": "  "}, headers=alice_headers)
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert response.json()["code"] == "validation_failure"


def test_create_post_bad_media_type(client, alice_headers) -> None:
    response = client.post(
        "/api/v1/posts/",
        json={"media": [{"type": "pdf", "link": "https://cdn.test/x", "storage_id": "x"}]},
        headers=alice_headers,
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_get_post(client, bob_headers, original) -> None:
    response = client.get(f"/api/v1/posts/{original.id}", headers=bob_headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["id"] == original.id


def test_get_missing_post(client, bob_headers) -> None:
    response = client.get("/api/v1/posts/99999", headers=bob_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"detail": "Post not found", "code": "not_found"}


def test_get_draft_only_for_author(client, alice_headers, bob_headers, draft) -> None:
    assert client.get(f"/api/v1/posts/{draft.id}", headers=alice_headers).status_code == 200
    response = client.get(f"/api/v1/posts/{draft.id}", headers=bob_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_reply_and_list_comments(client, bob_headers, carol_headers, original) -> None:
    first = client.post(
        f"/api/v1/posts/{original.id}/comments", json={"body": "one"}, headers=bob_headers
    )
    second = client.post(
        f"/api/v1/posts/{original.id}/comments", json={"body": "two"}, headers=carol_headers
    )
    assert first.status_code == status.HTTP_201_CREATED
    assert first.json()["kind"] == "REPLY"
    assert first.json()["parent"]["id"] == original.id

    listing = client.get(f"/api/v1/posts/{original.id}/comments", headers=bob_headers)
    assert listing.status_code == status.HTTP_200_OK
    assert [p["id"] for p in listing.json()] == [second.json()["id"], first.json()["id"]]

    parent = client.get(f"/api/v1/posts/{original.id}", headers=bob_headers).json()
    assert parent["comments_count"] == 2


def test_quote_and_list_quotes(client, bob_headers, original) -> None:
    response = client.post(
        f"/api/v1/posts/{original.id}/quotes", json={"body": "so true"}, headers=bob_headers
    )
    assert response.status_code == status.HTTP_201_CREATED
    quote = response.json()
    assert quote["kind"] == "QUOTE"
    assert quote["parent"]["quotes_count"] == 1

    listing = client.get(f"/api/v1/posts/{original.id}/quotes", headers=bob_headers)
    assert [p["id"] for p in listing.json()] == [quote["id"]]


def test_repost_shows_parent_engagement(client, bob_headers, carol_headers, original) -> None:
    client.post(f"/api/v1/posts/{original.id}/toggle-like", headers=carol_headers)
    response = client.post(f"/api/v1/posts/{original.id}/reposts", headers=bob_headers)
    assert response.status_code == status.HTTP_201_CREATED
    repost = response.json()
    assert repost["kind"] == "REPOST"
    assert repost["body"] is None
    assert repost["likes_count"] == 1
    assert repost["reposts_count"] == 1
    assert repost["parent"]["id"] == original.id
    assert repost["viewer"]["is_reposted_by_user"] is True


def test_repost_of_repost_is_invalid_target(client, carol_headers, repost) -> None:
    response = client.post(f"/api/v1/posts/{repost.id}/reposts", headers=carol_headers)
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert response.json()["code"] == "invalid_target"


def test_reply_to_repost_is_invalid_target(client, carol_headers, repost) -> None:
    response = client.post(
        f"/api/v1/posts/{repost.id}/comments", json={"body": "hi"}, headers=carol_headers
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_list_posts_defaults_to_caller(client, alice_headers, original, draft) -> None:
    response = client.get("/api/v1/posts/", headers=alice_headers)
    assert response.status_code == status.HTTP_200_OK
    assert [p["id"] for p in response.json()] == [original.id]


def test_list_posts_by_username(client, bob_headers, original, repost) -> None:
    response = client.get("/api/v1/posts/", params={"username": "bob"}, headers=bob_headers)
    assert [p["id"] for p in response.json()] == [repost.id]

    missing = client.get("/api/v1/posts/", params={"username": "nobody"}, headers=bob_headers)
    assert missing.status_code == status.HTTP_404_NOT_FOUND


def test_list_posts_paging_limits(client, alice_headers) -> None:
    too_big = client.get("/api/v1/posts/", params={"count": 101}, headers=alice_headers)
    zero_page = client.get("/api/v1/posts/", params={"page": 0}, headers=alice_headers)
    assert too_big.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert zero_page.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
