# tests/api/test_likes.py
import pytest
from httpx import AsyncClient
from fastapi import status

from blog_api.db.repositories.like_repo import comment_like_repo, post_like_repo


@pytest.fixture
async def post_id(client: AsyncClient, create_user) -> str:
    _, headers = await create_user(email="owner@example.com", name="Owner")
    response = await client.post("/api/posts", json={"title": "T", "content": "C"}, headers=headers)
    return response.json()["id"]


@pytest.mark.asyncio
async def test_toggle_like_twice(client: AsyncClient, create_user, post_id: str):
    _, headers = await create_user(email="fan@example.com", name="Fan")

    response = await client.post("/api/likes", json={"postId": post_id}, headers=headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["liked"] is True
    assert response.json()["count"] == 1

    response = await client.post("/api/likes", json={"postId": post_id}, headers=headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["liked"] is False
    assert response.json()["count"] == 0


@pytest.mark.asyncio
async def test_likes_from_different_users_add_up(client: AsyncClient, create_user, post_id: str):
    _, first = await create_user(email="one@example.com", name="One")
    _, second = await create_user(email="two@example.com", name="Two")

    await client.post("/api/likes", json={"postId": post_id}, headers=first)
    response = await client.post("/api/likes", json={"postId": post_id}, headers=second)
    assert response.json()["count"] == 2

    post = (await client.get(f"/api/posts/{post_id}")).json()
    assert post["like_count"] == 2


@pytest.mark.asyncio
async def test_toggle_like_validation(client: AsyncClient, create_user, post_id: str):
    _, headers = await create_user()

    response = await client.post("/api/likes", json={}, headers=headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST

    response = await client.post("/api/likes", json={"postId": post_id})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED

    response = await client.post("/api/likes", json={"postId": "missing"}, headers=headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["error_code"] == "post_not_found"


@pytest.mark.asyncio
async def test_concurrent_like_is_a_conflict(client: AsyncClient, create_user, post_id: str, monkeypatch):
    _, headers = await create_user()
    await client.post("/api/likes", json={"postId": post_id}, headers=headers)

    # Simulate the other request's insert landing between our lookup and our insert
    async def not_found_yet(session, *, user_id, target_id):
        return None

    monkeypatch.setattr(post_like_repo, "get_for_user", not_found_yet)
    response = await client.post("/api/likes", json={"postId": post_id}, headers=headers)
    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["error_code"] == "already_liked"

    monkeypatch.undo()
    response = await client.get("/api/likes/status", params={"postId": post_id}, headers=headers)
    assert response.json() == {"isLiked": True, "count": 1}


@pytest.mark.asyncio
async def test_unlike(client: AsyncClient, create_user, post_id: str):
    _, headers = await create_user()

    response = await client.request("DELETE", "/api/likes", json={"postId": post_id}, headers=headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["error_code"] == "like_not_found"

    await client.post("/api/likes", json={"postId": post_id}, headers=headers)
    response = await client.request("DELETE", "/api/likes", json={"postId": post_id}, headers=headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["liked"] is False
    assert response.json()["count"] == 0


@pytest.mark.asyncio
async def test_like_status(client: AsyncClient, create_user, post_id: str):
    user, headers = await create_user()

    response = await client.get("/api/likes/status", params={"postId": post_id}, headers=headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"isLiked": False, "count": 0}

    await client.post("/api/likes", json={"postId": post_id}, headers=headers)
    response = await client.get(
        "/api/likes/status", params={"postId": post_id, "userId": user.id}, headers=headers
    )
    assert response.json() == {"isLiked": True, "count": 1}


@pytest.mark.asyncio
async def test_like_status_for_another_user_is_forbidden(client: AsyncClient, create_user, post_id: str):
    _, headers = await create_user()
    response = await client.get(
        "/api/likes/status", params={"postId": post_id, "userId": "someone-else"}, headers=headers
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.asyncio
async def test_like_status_missing_post(client: AsyncClient, create_user):
    _, headers = await create_user()
    response = await client.get("/api/likes/status", params={"postId": "missing"}, headers=headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
async def test_toggle_comment_like(client: AsyncClient, create_user, post_id: str):
    _, headers = await create_user()
    comment = (
        await client.post("/api/comments", json={"postId": post_id, "content": "hi"}, headers=headers)
    ).json()

    response = await client.post("/api/comments/likes", json={"commentId": comment["id"]}, headers=headers)
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["liked"] is True
    assert response.json()["count"] == 1

    listed = (await client.get("/api/comments", params={"postId": post_id}, headers=headers)).json()
    assert listed[0]["like_count"] == 1

    response = await client.post("/api/comments/likes", json={"commentId": comment["id"]}, headers=headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["liked"] is False
    assert response.json()["count"] == 0

    response = await client.request(
        "DELETE", "/api/comments/likes", json={"commentId": comment["id"]}, headers=headers
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
async def test_comment_like_missing_comment(client: AsyncClient, create_user):
    _, headers = await create_user()
    response = await client.post("/api/comments/likes", json={"commentId": "missing"}, headers=headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["error_code"] == "comment_not_found"


@pytest.mark.asyncio
async def test_concurrent_comment_like_is_a_conflict(client: AsyncClient, create_user, post_id: str, monkeypatch):
    _, headers = await create_user()
    comment = (
        await client.post("/api/comments", json={"postId": post_id, "content": "hi"}, headers=headers)
    ).json()
    await client.post("/api/comments/likes", json={"commentId": comment["id"]}, headers=headers)

    async def not_found_yet(session, *, user_id, target_id):
        return None

    monkeypatch.setattr(comment_like_repo, "get_for_user", not_found_yet)
    response = await client.post("/api/comments/likes", json={"commentId": comment["id"]}, headers=headers)
    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["error_code"] == "already_liked"

    monkeypatch.undo()
    listed = (await client.get("/api/comments", params={"postId": post_id}, headers=headers)).json()
    assert listed[0]["like_count"] == 1
