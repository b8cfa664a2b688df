"""
PicTweet Backend — API Integration Tests
==========================================

What:  Drives the HTTP surface end to end: auth, tweets, follows, likes,
       comments, media and health.
How:   httpx AsyncClient over ASGITransport against a temporary SQLite
       database (fresh tables per test, see conftest.database).
"""

import pytest

API = "/api/v1"


async def post_tweet(client, headers, png_base64, text="hello world"):
    response = await client.post(
        f"{API}/tweets",
        json={"imageBase64": png_base64, "imageFileType": "image/png", "tweetText": text},
        headers=headers,
    )
    assert response.status_code == 200, response.text
    return response.json()


class TestHealth:

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"

    @pytest.mark.asyncio
    async def test_request_id_header(self, test_client):
        response = await test_client.get(f"{API}/tweets", headers={"X-Request-ID": "abc123"})
        assert response.headers["X-Request-ID"] == "abc123"


class TestAuth:

    @pytest.mark.asyncio
    async def test_register_login_me(self, test_client, register_user):
        user, headers = await register_user("alice", bio="photographer")
        assert user["username"] == "alice"
        assert user["bio"] == "photographer"
        assert "passwordHash" not in user

        login = await test_client.post(
            f"{API}/auth/login", json={"username": "alice", "password": "secret123"}
        )
        assert login.status_code == 200
        assert login.json()["tokenType"] == "bearer"

        by_email = await test_client.post(
            f"{API}/auth/login", json={"username": "alice@pictweet.io", "password": "secret123"}
        )
        assert by_email.status_code == 200

        me = await test_client.get(f"{API}/auth/me", headers=headers)
        assert me.status_code == 200
        assert me.json()["id"] == user["id"]

    @pytest.mark.asyncio
    async def test_duplicate_username(self, test_client, register_user):
        await register_user("alice")
        response = await test_client.post(
            f"{API}/auth/register",
            json={"username": "alice", "email": "second@pictweet.io", "password": "secret123"},
        )
        assert response.status_code == 409
        assert response.json()["error"] == "conflict"

    @pytest.mark.asyncio
    async def test_wrong_password(self, test_client, register_user):
        await register_user("alice")
        response = await test_client.post(
            f"{API}/auth/login", json={"username": "alice", "password": "not-it"}
        )
        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    @pytest.mark.asyncio
    async def test_me_requires_token(self, test_client):
        response = await test_client.get(f"{API}/auth/me")
        assert response.status_code == 401
        assert response.json()["error"] == "not_authenticated"

    @pytest.mark.asyncio
    async def test_me_rejects_bad_token(self, test_client):
        response = await test_client.get(
            f"{API}/auth/me", headers={"Authorization": "Bearer garbage"}
        )
        assert response.status_code == 401


class TestTweets:

    @pytest.mark.asyncio
    async def test_create_and_fetch(self, test_client, register_user, sample_png_base64):
        user, headers = await register_user("alice")

        tweet = await post_tweet(test_client, headers, sample_png_base64, "sunset at the beach")
        assert tweet["userId"] == user["id"]
        assert tweet["username"] == "alice"
        assert tweet["tweetText"] == "sunset at the beach"
        assert tweet["imageUrl"].startswith("/media/")

        detail = await test_client.get(f"{API}/tweets/{tweet['id']}")
        assert detail.status_code == 200
        assert detail.json()["id"] == tweet["id"]

        image = await test_client.get(tweet["imageUrl"])
        assert image.status_code == 200
        assert image.content.startswith(b"\x89PNG")

    @pytest.mark.asyncio
    async def test_create_requires_auth(self, test_client, sample_png_base64):
        response = await test_client.post(
            f"{API}/tweets",
            json={"imageBase64": sample_png_base64, "imageFileType": "image/png"},
        )
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_create_rejects_non_image(self, test_client, register_user, sample_png_base64):
        _, headers = await register_user("alice")
        response = await test_client.post(
            f"{API}/tweets",
            json={"imageBase64": sample_png_base64, "imageFileType": "application/pdf"},
            headers=headers,
        )
        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    async def test_create_rejects_empty_image(self, test_client, register_user):
        _, headers = await register_user("alice")
        response = await test_client.post(
            f"{API}/tweets",
            json={"imageBase64": "", "imageFileType": "image/png"},
            headers=headers,
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_feed_is_newest_first_and_paginated(
        self, test_client, register_user, sample_png_base64
    ):
        _, headers = await register_user("alice")
        ids = [
            (await post_tweet(test_client, headers, sample_png_base64, f"tweet {i}"))["id"]
            for i in range(3)
        ]

        feed = await test_client.get(f"{API}/tweets", params={"limit": 2})
        assert feed.status_code == 200
        assert [t["id"] for t in feed.json()] == [ids[2], ids[1]]

        page2 = await test_client.get(f"{API}/tweets", params={"limit": 2, "offset": 2})
        assert [t["id"] for t in page2.json()] == [ids[0]]

    @pytest.mark.asyncio
    async def test_feed_rejects_bad_limit(self, test_client):
        response = await test_client.get(f"{API}/tweets", params={"limit": 0})
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_search(self, test_client, register_user, sample_png_base64):
        _, headers = await register_user("alice")
        beach = await post_tweet(test_client, headers, sample_png_base64, "Sunset at the beach")
        await post_tweet(test_client, headers, sample_png_base64, "Mountain hike")

        response = await test_client.get(f"{API}/tweets/search", params={"query": "sunset"})
        assert response.status_code == 200
        assert [t["id"] for t in response.json()] == [beach["id"]]

        blank = await test_client.get(f"{API}/tweets/search", params={"query": "  "})
        assert blank.status_code == 400

    @pytest.mark.asyncio
    async def test_missing_tweet(self, test_client):
        response = await test_client.get(f"{API}/tweets/999")
        assert response.status_code == 404
        assert response.json()["message"] == "Tweet not found"


class TestFollows:

    @pytest.mark.asyncio
    async def test_follow_flow(self, test_client, register_user):
        alice, alice_headers = await register_user("alice")
        bob, _ = await register_user("bob")

        follow = await test_client.post(f"{API}/users/{bob['id']}/follow", headers=alice_headers)
        assert follow.status_code == 200
        assert follow.json()["message"] == f"Successfully followed user {bob['id']}"

        again = await test_client.post(f"{API}/users/{bob['id']}/follow", headers=alice_headers)
        assert again.status_code == 409

        profile = await test_client.get(f"{API}/users/{bob['id']}/profile")
        assert profile.json()["followers"] == 1
        assert profile.json()["following"] == 0

        followers = await test_client.get(f"{API}/users/{bob['id']}/followers")
        assert [u["username"] for u in followers.json()] == ["alice"]

        following = await test_client.get(f"{API}/users/{alice['id']}/following")
        assert [u["username"] for u in following.json()] == ["bob"]

        unfollow = await test_client.delete(
            f"{API}/users/{bob['id']}/unfollow", headers=alice_headers
        )
        assert unfollow.status_code == 200

        gone = await test_client.delete(f"{API}/users/{bob['id']}/unfollow", headers=alice_headers)
        assert gone.status_code == 404

        empty = await test_client.get(f"{API}/users/{bob['id']}/followers")
        assert empty.status_code == 404

    @pytest.mark.asyncio
    async def test_cannot_follow_self(self, test_client, register_user):
        alice, headers = await register_user("alice")
        response = await test_client.post(f"{API}/users/{alice['id']}/follow", headers=headers)
        assert response.status_code == 400
        assert response.json()["message"] == "You cannot follow yourself."

    @pytest.mark.asyncio
    async def test_follow_unknown_user(self, test_client, register_user):
        _, headers = await register_user("alice")
        response = await test_client.post(f"{API}/users/999/follow", headers=headers)
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_unknown_profile(self, test_client):
        response = await test_client.get(f"{API}/users/999/profile")
        assert response.status_code == 404


class TestLikesAndComments:

    @pytest.mark.asyncio
    async def test_like_flow(self, test_client, register_user, sample_png_base64):
        alice, alice_headers = await register_user("alice")
        _, bob_headers = await register_user("bob")
        tweet = await post_tweet(test_client, alice_headers, sample_png_base64)

        like = await test_client.post(f"{API}/tweets/{tweet['id']}/like", headers=bob_headers)
        assert like.status_code == 201
        assert like.json()["message"] == "Tweet liked successfully"

        again = await test_client.post(f"{API}/tweets/{tweet['id']}/like", headers=bob_headers)
        assert again.status_code == 409

        bob_id = (await test_client.get(f"{API}/auth/me", headers=bob_headers)).json()["id"]

        anonymous = await test_client.get(f"{API}/users/{bob_id}/likes")
        assert anonymous.status_code == 200
        assert [t["id"] for t in anonymous.json()] == [tweet["id"]]
        assert anonymous.json()[0]["hasLiked"] is False

        as_owner = await test_client.get(f"{API}/users/{bob_id}/likes", headers=bob_headers)
        assert as_owner.json()[0]["hasLiked"] is True

        as_alice = await test_client.get(f"{API}/users/{bob_id}/likes", headers=alice_headers)
        assert as_alice.json()[0]["hasLiked"] is False

        unlike = await test_client.delete(f"{API}/tweets/{tweet['id']}/unlike", headers=bob_headers)
        assert unlike.status_code == 200

        unlike_again = await test_client.delete(
            f"{API}/tweets/{tweet['id']}/unlike", headers=bob_headers
        )
        assert unlike_again.status_code == 200

        none_left = await test_client.get(f"{API}/users/{bob_id}/likes")
        assert none_left.status_code == 404

    @pytest.mark.asyncio
    async def test_like_missing_tweet(self, test_client, register_user):
        _, headers = await register_user("alice")
        response = await test_client.post(f"{API}/tweets/999/like", headers=headers)
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_like_requires_auth(self, test_client):
        response = await test_client.post(f"{API}/tweets/1/like")
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_comments(self, test_client, register_user, sample_png_base64):
        _, alice_headers = await register_user("alice")
        _, bob_headers = await register_user("bob")
        tweet = await post_tweet(test_client, alice_headers, sample_png_base64)
        url = f"{API}/tweets/{tweet['id']}/comments"

        first = await test_client.post(url, json={"text": "first!"}, headers=bob_headers)
        assert first.status_code == 201
        assert first.json()["username"] == "bob"
        second = await test_client.post(url, json={"text": "  second  "}, headers=alice_headers)
        assert second.json()["text"] == "second"

        listed = await test_client.get(url)
        assert listed.status_code == 200
        assert [c["text"] for c in listed.json()] == ["second", "first!"]

        paged = await test_client.get(url, params={"limit": 1, "offset": 1})
        assert [c["text"] for c in paged.json()] == ["first!"]

        blank = await test_client.post(url, json={"text": "   "}, headers=bob_headers)
        assert blank.status_code == 400

        missing = await test_client.get(f"{API}/tweets/999/comments")
        assert missing.status_code == 404


class TestMedia:

    @pytest.mark.asyncio
    async def test_missing_media(self, test_client):
        response = await test_client.get("/media/2024/01/01/nothing.png")
        assert response.status_code == 404
