# mypy: ignore-errors
# tests/v1/test_drafts.py
"""Tests for draft endpoints."""

from fastapi import status


def test_create_and_list_drafts(client, alice_headers) -> None:
    response = client.post("/api/v1/drafts/", json={"body": "later"}, headers=alice_headers)
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["status"] == "DRAFT"

    drafts = client.get("/api/v1/drafts/", headers=alice_headers).json()
    assert [d["id"] for d in drafts] == [response.json()["id"]]
    assert client.get("/api/v1/posts/", headers=alice_headers).json() == []


def test_publish_draft(client, alice_headers, draft) -> None:
    response = client.post(f"/api/v1/drafts/alice/{draft.id}/publish", headers=alice_headers)
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["status"] == "PUBLISHED"
    assert response.json()["id"] == draft.id
    assert client.get("/api/v1/drafts/", headers=alice_headers).json() == []


def test_publish_twice(client, alice_headers, draft) -> None:
    url = f"/api/v1/drafts/alice/{draft.id}/publish"
    client.post(url, headers=alice_headers)
    response = client.post(url, headers=alice_headers)
    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["code"] == "invalid_state"


def test_publish_through_other_username_is_forbidden(client, bob_headers, draft) -> None:
    response = client.post(f"/api/v1/drafts/alice/{draft.id}/publish", headers=bob_headers)
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["code"] == "forbidden"


def test_publish_someone_elses_draft_id_looks_missing(client, bob_headers, bob, draft) -> None:
    """Another user's draft id answers exactly like an id that does not exist."""
    foreign = client.post(f"/api/v1/drafts/bob/{draft.id}/publish", headers=bob_headers)
    missing = client.post("/api/v1/drafts/bob/999999/publish", headers=bob_headers)
    assert foreign.status_code == status.HTTP_404_NOT_FOUND
    assert foreign.json() == missing.json() == {"detail": "Draft not found", "code": "not_found"}


def test_publish_unknown_user(client, alice_headers, draft) -> None:
    response = client.post(f"/api/v1/drafts/ghost/{draft.id}/publish", headers=alice_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_publish_missing_draft(client, alice_headers, alice) -> None:
    response = client.post("/api/v1/drafts/alice/777/publish", headers=alice_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_draft_cannot_be_replied_to(client, bob_headers, draft) -> None:
    response = client.post(
        f"/api/v1/posts/{draft.id}/comments", json={"body": "early"}, headers=bob_headers
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_list_drafts_pages_by_page_and_count(client, alice_headers) -> None:
    ids = [
        client.post("/api/v1/drafts/", json={"body": f"draft {n}"}, headers=alice_headers).json()["id"]
        for n in range(3)
    ]

    first = client.get("/api/v1/drafts/?page=1&count=2", headers=alice_headers).json()
    second = client.get("/api/v1/drafts/?page=2&count=2", headers=alice_headers).json()
    assert [d["id"] for d in first] == [ids[2], ids[1]]
    assert [d["id"] for d in second] == [ids[0]]

    response = client.get("/api/v1/drafts/?page=0", headers=alice_headers)
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
