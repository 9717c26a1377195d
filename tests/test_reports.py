import pytest


@pytest.fixture
def reviewer(create_user):
    return create_user(is_reviewer=True)


def test_report_post(client, create_user, create_post, auth_headers):
    post = create_post(title="Spam")
    reporter = create_user()

    response = client.post(
        "/api/reports",
        json={"reason": "spam", "type": "POST", "postId": post.id},
        headers=auth_headers(reporter),
    )

    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "PENDING"
    assert data["type"] == "POST"
    assert data["postId"] == post.id
    assert data["commentId"] is None
    assert data["post"] == {"id": post.id, "title": "Spam"}
    assert data["reporter"] == {"id": reporter.id, "name": reporter.name}


def test_report_comment(client, create_user, create_comment, auth_headers):
    comment = create_comment(content="rude")

    response = client.post(
        "/api/reports",
        json={"reason": "abuse", "type": "COMMENT", "commentId": comment.id},
        headers=auth_headers(create_user()),
    )

    assert response.status_code == 201
    assert response.json()["comment"] == {"id": comment.id, "content": "rude"}


@pytest.mark.parametrize(
    "payload",
    [
        {"reason": "spam", "type": "POST"},
        {"reason": "spam", "type": "COMMENT", "postId": 1},
        {"reason": "", "type": "POST", "postId": 1},
        {"reason": "spam", "type": "USER", "postId": 1},
    ],
)
def test_report_validation(client, create_user, auth_headers, payload):
    response = client.post(
        "/api/reports", json=payload, headers=auth_headers(create_user())
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Validation error"


def test_report_missing_target(client, create_user, create_post, auth_headers, db):
    headers = auth_headers(create_user())
    deleted = create_post()
    deleted.deleted_at = deleted.created_at
    db.commit()

    missing = client.post(
        "/api/reports",
        json={"reason": "spam", "type": "POST", "postId": 999},
        headers=headers,
    )
    gone = client.post(
        "/api/reports",
        json={"reason": "spam", "type": "POST", "postId": deleted.id},
        headers=headers,
    )

    assert missing.status_code == 404
    assert missing.json() == {"error": "Post not found"}
    assert gone.status_code == 404


def test_reviewer_routes_are_gated(client, create_user, auth_headers):
    headers = auth_headers(create_user())

    listing = client.get("/api/reports", headers=headers)
    update = client.put("/api/reports/1", json={"status": "RESOLVED"}, headers=headers)

    assert listing.status_code == 403
    assert listing.json() == {"error": "Reviewer access required"}
    assert update.status_code == 403
    assert client.get("/api/reports").status_code == 401


def test_list_and_review_reports(client, create_user, create_post, auth_headers, reviewer):
    reporter = create_user()
    post = create_post()
    for reason in ("spam", "scam"):
        client.post(
            "/api/reports",
            json={"reason": reason, "type": "POST", "postId": post.id},
            headers=auth_headers(reporter),
        )

    listing = client.get("/api/reports", headers=auth_headers(reviewer)).json()
    assert [report["reason"] for report in listing["reports"]] == ["scam", "spam"]
    report_id = listing["reports"][0]["id"]

    response = client.put(
        f"/api/reports/{report_id}",
        json={"status": "RESOLVED", "notes": "removed"},
        headers=auth_headers(reviewer),
    )
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "RESOLVED"
    assert data["notes"] == "removed"
    assert data["reviewedBy"] == reviewer.id
    assert data["reviewedAt"] is not None

    pending = client.get(
        "/api/reports", params={"status": "PENDING"}, headers=auth_headers(reviewer)
    ).json()
    assert [report["reason"] for report in pending["reports"]] == ["spam"]


def test_review_missing_report(client, auth_headers, reviewer):
    response = client.put(
        "/api/reports/999",
        json={"status": "DISMISSED"},
        headers=auth_headers(reviewer),
    )

    assert response.status_code == 404
    assert response.json() == {"error": "Report not found"}
