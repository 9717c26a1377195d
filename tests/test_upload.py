from tests.conftest import PUBLIC_BASE

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


def test_presigned_avatar_url(client, create_user, auth_headers):
    user = create_user()

    response = client.post(
        "/api/upload/presigned-url",
        json={"filename": "me.PNG", "contentType": "image/png", "type": "avatar"},
        headers=auth_headers(user),
    )

    assert response.status_code == 200
    data = response.json()
    assert data["key"].startswith(f"users/{user.id}/avatar-")
    assert data["key"].endswith(".png")
    assert data["publicUrl"] == f"{PUBLIC_BASE}/{data['key']}"
    assert "X-Amz-Signature" in data["presignedUrl"]


def test_presigned_post_url_requires_post_id(client, create_user, auth_headers):
    headers = auth_headers(create_user())
    payload = {"filename": "a.jpg", "contentType": "image/jpeg", "type": "post"}

    missing = client.post("/api/upload/presigned-url", json=payload, headers=headers)
    assert missing.status_code == 400
    assert missing.json() == {"error": "postId is required for post images"}

    ok = client.post(
        "/api/upload/presigned-url", json={**payload, "postId": 7}, headers=headers
    )
    assert ok.status_code == 200
    assert "/7-" in ok.json()["key"]


def test_presigned_url_rejects_non_images(client, create_user, auth_headers):
    response = client.post(
        "/api/upload/presigned-url",
        json={"filename": "run.exe", "contentType": "application/x-msdownload", "type": "avatar"},
        headers=auth_headers(create_user()),
    )

    assert response.status_code == 400


def test_upload_requires_session(client):
    response = client.post(
        "/api/upload/presigned-url",
        json={"filename": "a.png", "contentType": "image/png", "type": "avatar"},
    )

    assert response.status_code == 401


def test_direct_avatar_upload_replaces_old_object(client, create_user, auth_headers, storage):
    user = create_user(image=f"{PUBLIC_BASE}/users/1/avatar-1.png")

    response = client.post(
        "/api/upload/direct",
        files={"file": ("me.png", PNG, "image/png")},
        data={"type": "avatar"},
        headers=auth_headers(user),
    )

    assert response.status_code == 200
    data = response.json()
    assert storage.deleted == ["users/1/avatar-1.png"]
    assert storage.uploaded[data["key"]] == (PNG, "image/png")
    assert data["publicUrl"] == f"{PUBLIC_BASE}/{data['key']}"
    assert "X-Amz-Signature" in data["url"]


def test_direct_upload_ignores_delete_failure(client, create_user, auth_headers, storage):
    user = create_user(image=f"{PUBLIC_BASE}/users/1/avatar-1.png")
    storage.fail_delete = True

    response = client.post(
        "/api/upload/direct",
        files={"file": ("me.png", PNG, "image/png")},
        data={"type": "avatar"},
        headers=auth_headers(user),
    )

    assert response.status_code == 200
    assert len(storage.uploaded) == 1


def test_direct_post_image(client, create_user, auth_headers, storage):
    user = create_user()

    response = client.post(
        "/api/upload/direct",
        files={"file": ("photo.jpg", b"jpegdata", "image/jpeg")},
        data={"type": "post", "postId": "12"},
        headers=auth_headers(user),
    )

    assert response.status_code == 200
    assert response.json()["key"].startswith(f"posts/{user.id}/12-")
    assert storage.deleted == []


def test_direct_upload_storage_failure(client, create_user, auth_headers, storage):
    storage.fail_upload = True

    response = client.post(
        "/api/upload/direct",
        files={"file": ("me.png", PNG, "image/png")},
        data={"type": "avatar"},
        headers=auth_headers(create_user()),
    )

    assert response.status_code == 500
    assert response.json() == {
        "error": "Failed to upload file",
        "details": "bucket unavailable",
    }


def test_direct_upload_rejects_empty_file(client, create_user, auth_headers):
    response = client.post(
        "/api/upload/direct",
        files={"file": ("me.png", b"", "image/png")},
        data={"type": "avatar"},
        headers=auth_headers(create_user()),
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Empty file uploaded"}
