from tests.conftest import PUBLIC_BASE


def test_get_me_includes_email(client, create_user, auth_headers):
    user = create_user(bio="about me")

    response = client.get("/api/users/me", headers=auth_headers(user))

    assert response.status_code == 200
    data = response.json()
    assert data["email"] == user.email
    assert data["bio"] == "about me"
    assert data["postsCount"] == 0


def test_profile_hides_email_from_others(client, create_user, auth_headers):
    user = create_user()
    other = create_user()

    as_other = client.get(f"/api/users/{user.id}", headers=auth_headers(other)).json()
    anonymous = client.get(f"/api/users/{user.id}").json()
    as_self = client.get(f"/api/users/{user.id}", headers=auth_headers(user)).json()

    assert as_other["email"] is None
    assert anonymous["email"] is None
    assert as_self["email"] == user.email


def test_profile_counts(client, create_user, create_post, auth_headers, db):
    user = create_user()
    fan = create_user()
    create_post(author_id=user.id)
    removed = create_post(author_id=user.id)
    removed.deleted_at = removed.created_at
    db.commit()
    client.post(f"/api/follows/{user.id}", headers=auth_headers(fan))

    data = client.get(f"/api/users/{user.id}").json()

    assert data["postsCount"] == 1
    assert data["followersCount"] == 1
    assert data["followingCount"] == 0


def test_unknown_user(client):
    response = client.get("/api/users/999")

    assert response.status_code == 404
    assert response.json() == {"error": "User not found"}


def test_update_me(client, create_user, auth_headers):
    user = create_user(name="Before", bio="old")
    image = f"{PUBLIC_BASE}/users/{user.id}/avatar-1.png"

    response = client.put(
        "/api/users/me",
        json={"name": "After", "image": image},
        headers=auth_headers(user),
    )

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "After"
    assert data["bio"] == "old"
    assert "X-Amz-Signature" in data["image"]

    cleared = client.put(
        "/api/users/me", json={"bio": None}, headers=auth_headers(user)
    ).json()
    assert cleared["bio"] is None
    assert cleared["name"] == "After"


def test_update_me_rejects_bad_image(client, create_user, auth_headers):
    response = client.put(
        "/api/users/me",
        json={"image": "ftp://example.com/a.png"},
        headers=auth_headers(create_user()),
    )

    assert response.status_code == 400


def test_user_posts(client, create_user, create_post, auth_headers):
    user = create_user()
    other = create_user()
    mine = create_post(author_id=user.id)
    create_post(author_id=other.id)
    client.post(f"/api/likes/posts/{mine.id}", headers=auth_headers(user))

    data = client.get(f"/api/users/{user.id}/posts", headers=auth_headers(user)).json()

    assert [post["id"] for post in data["posts"]] == [mine.id]
    assert data["posts"][0]["isOwner"] is True
    assert data["posts"][0]["isLiked"] is True
    assert data["pagination"]["total"] == 1
