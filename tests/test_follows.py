def test_follow_user(client, create_user, auth_headers):
    alice = create_user()
    bob = create_user(bio="hello")

    response = client.post(f"/api/follows/{bob.id}", headers=auth_headers(alice))

    assert response.status_code == 201
    data = response.json()
    assert data["followerId"] == alice.id
    assert data["followingId"] == bob.id
    assert data["following"] == {
        "id": bob.id,
        "name": bob.name,
        "image": None,
        "bio": "hello",
    }
    assert "createdAt" in data


def test_follow_errors(client, create_user, auth_headers):
    alice = create_user()
    bob = create_user()
    headers = auth_headers(alice)

    self_follow = client.post(f"/api/follows/{alice.id}", headers=headers)
    assert self_follow.status_code == 400
    assert self_follow.json() == {"error": "Cannot follow yourself"}

    missing = client.post("/api/follows/999", headers=headers)
    assert missing.status_code == 404

    client.post(f"/api/follows/{bob.id}", headers=headers)
    duplicate = client.post(f"/api/follows/{bob.id}", headers=headers)
    assert duplicate.status_code == 400
    assert duplicate.json() == {"error": "Already following this user"}


def test_unfollow(client, create_user, auth_headers):
    alice = create_user()
    bob = create_user()
    headers = auth_headers(alice)
    client.post(f"/api/follows/{bob.id}", headers=headers)

    response = client.delete(f"/api/follows/{bob.id}", headers=headers)
    assert response.status_code == 200
    assert response.json() == {"success": True}

    again = client.delete(f"/api/follows/{bob.id}", headers=headers)
    assert again.status_code == 400
    assert again.json() == {"error": "Not following this user"}


def test_check_following(client, create_user, auth_headers):
    alice = create_user()
    bob = create_user()
    headers = auth_headers(alice)

    assert client.get(f"/api/follows/{bob.id}/check", headers=headers).json() == {
        "isFollowing": False
    }
    client.post(f"/api/follows/{bob.id}", headers=headers)
    assert client.get(f"/api/follows/{bob.id}/check", headers=headers).json() == {
        "isFollowing": True
    }


def test_followers_and_following_lists(client, create_user, auth_headers):
    star = create_user()
    fans = [create_user() for _ in range(3)]
    for fan in fans:
        client.post(f"/api/follows/{star.id}", headers=auth_headers(fan))

    followers = client.get(f"/api/follows/{star.id}/followers").json()
    assert followers["pagination"]["total"] == 3
    # Most recent follower first
    assert [user["id"] for user in followers["followers"]] == [
        fan.id for fan in reversed(fans)
    ]

    following = client.get(f"/api/follows/{fans[0].id}/following").json()
    assert [user["id"] for user in following["following"]] == [star.id]

    page = client.get(
        f"/api/follows/{star.id}/followers", params={"limit": 2, "page": 2}
    ).json()
    assert len(page["followers"]) == 1
    assert page["pagination"]["totalPages"] == 2
