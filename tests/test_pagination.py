import math

import pytest

from app.utils.pagination import PageParams


def test_offset():
    assert PageParams(page=1, limit=10).offset == 0
    assert PageParams(page=3, limit=20).offset == 40


@pytest.mark.parametrize("page,limit", [(1, 1), (1, 10), (2, 10), (3, 4), (1, 50)])
def test_page_bounds(client, create_user, create_post, page, limit):
    author = create_user()
    for i in range(12):
        create_post(author_id=author.id, title=f"post {i}")

    data = client.get("/api/posts", params={"page": page, "limit": limit}).json()

    assert len(data["posts"]) <= limit
    assert data["pagination"]["total"] == 12
    assert data["pagination"]["totalPages"] == math.ceil(12 / limit)
    expected = max(0, min(limit, 12 - (page - 1) * limit))
    assert len(data["posts"]) == expected


def test_empty_list_has_zero_pages(client):
    data = client.get("/api/posts").json()

    assert data["posts"] == []
    assert data["pagination"]["totalPages"] == 0


@pytest.mark.parametrize(
    "params", [{"page": 0}, {"limit": 0}, {"limit": 51}, {"page": "abc"}]
)
def test_out_of_range_is_rejected(client, params):
    response = client.get("/api/posts", params=params)

    assert response.status_code == 400
    assert response.json()["error"] == "Validation error"


def test_pages_do_not_overlap(client, create_user, create_post):
    author = create_user()
    for i in range(5):
        create_post(author_id=author.id)

    first = client.get("/api/posts", params={"page": 1, "limit": 3}).json()["posts"]
    second = client.get("/api/posts", params={"page": 2, "limit": 3}).json()["posts"]

    ids = [post["id"] for post in first + second]
    assert len(ids) == 5
    assert len(set(ids)) == 5
