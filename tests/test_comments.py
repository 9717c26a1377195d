def test_create_and_list_comments(client, create_user, create_post, auth_headers):
    post = create_post()
    user = create_user()

    for text in ("first", "second"):
        response = client.post(
            f"/api/comments/posts/{post.id}",
            json={"content": text},
            headers=auth_headers(user),
        )
        assert response.status_code == 201

    data = client.get(f"/api/comments/posts/{post.id}").json()

    # Threads read oldest first
    assert [comment["content"] for comment in data["comments"]] == ["first", "second"]
    assert data["pagination"]["total"] == 2
    first = data["comments"][0]
    assert first["postId"] == post.id
    assert first["authorId"] == user.id
    assert first["author"]["name"] == user.name
    assert first["isOwner"] is False


def test_comment_on_missing_post(client, create_user, auth_headers):
    response = client.post(
        "/api/comments/posts/999",
        json={"content": "hello"},
        headers=auth_headers(create_user()),
    )

    assert response.status_code == 404
    assert client.get("/api/comments/posts/999").status_code == 404


def test_comments_of_deleted_post_are_unreachable(client, create_post, create_comment, db):
    post = create_post()
    create_comment(post_id=post.id)
    post.deleted_at = post.created_at
    db.commit()

    assert client.get(f"/api/comments/posts/{post.id}").status_code == 404


def test_comment_flags_for_viewer(client, create_user, create_comment, auth_headers):
    author = create_user()
    comment = create_comment(author_id=author.id)

    client.post(f"/api/likes/comments/{comment.id}", headers=auth_headers(author))
    data = client.get(
        f"/api/comments/posts/{comment.post_id}", headers=auth_headers(author)
    ).json()["comments"][0]

    assert data["isOwner"] is True
    assert data["isLiked"] is True
    assert data["likesCount"] == 1


def test_update_comment(client, create_user, create_comment, auth_headers):
    author = create_user()
    comment = create_comment(author_id=author.id)

    response = client.put(
        f"/api/comments/{comment.id}",
        json={"content": "edited"},
        headers=auth_headers(author),
    )

    assert response.status_code == 200
    assert response.json()["content"] == "edited"


def test_non_owner_cannot_touch_comment(client, create_user, create_comment, auth_headers):
    comment = create_comment()
    intruder = create_user()

    update = client.put(
        f"/api/comments/{comment.id}",
        json={"content": "edited"},
        headers=auth_headers(intruder),
    )
    delete = client.delete(f"/api/comments/{comment.id}", headers=auth_headers(intruder))

    assert update.status_code == 404
    assert update.json() == {"error": "Comment not found or unauthorized"}
    assert delete.status_code == 404


def test_deleted_comment_is_hidden(client, create_user, create_comment, auth_headers):
    author = create_user()
    comment = create_comment(author_id=author.id)
    create_comment(post_id=comment.post_id)

    response = client.delete(f"/api/comments/{comment.id}", headers=auth_headers(author))

    assert response.json() == {"message": "Comment deleted successfully"}
    data = client.get(f"/api/comments/posts/{comment.post_id}").json()
    assert comment.id not in [c["id"] for c in data["comments"]]
    assert data["pagination"]["total"] == 1
    assert client.get(f"/api/posts/{comment.post_id}").json()["commentsCount"] == 1


def test_empty_comment_rejected(client, create_user, create_post, auth_headers):
    post = create_post()

    response = client.post(
        f"/api/comments/posts/{post.id}",
        json={"content": ""},
        headers=auth_headers(create_user()),
    )

    assert response.status_code == 400
