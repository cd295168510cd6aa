import os
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session
from blog_backend.config import UPLOAD_DIR
from blog_backend.main import app
from blog_backend.models import Article
from tests.helpers import create_article, auth_header


def test_create_article(client, alice):
    res = create_article(client, alice, title="My title")
    assert res.status_code == 201

    article = res.json()["article"]
    assert article["title"] == "My title"
    assert article["author"] == "alice"
    assert article["tags"] == ["api", "node"]
    assert article["likes"] == 0
    assert article["liked"] is False
    assert article["comments"] == []
    assert article["image"].startswith("/uploads/cover-")
    assert os.path.exists(os.path.join(UPLOAD_DIR, os.path.basename(article["image"])))


def test_create_article_accepts_single_bare_tag(client, alice):
    res = create_article(client, alice, tags="frontend")
    assert res.status_code == 201
    assert res.json()["article"]["tags"] == ["frontend"]


def test_create_article_requires_auth(client):
    res = create_article(client, "bogus")
    assert res.status_code == 401


@pytest.mark.parametrize("overrides, message", [
    ({"title": "  "}, "Title is required."),
    ({"content": ""}, "Content is required."),
    ({"category": "Cooking"}, "Invalid category provided."),
    ({"status": "live"}, "Invalid status provided."),
    ({"tags": "[]"}, "At least one tag is required."),
    ({"tags": '["api", "python"]'}, "Invalid tag(s) provided."),
])
def test_create_article_validation(client, alice, overrides, message):
    res = create_article(client, alice, **overrides)
    assert res.status_code == 400
    assert res.json() == {"error": "ValidationError", "message": message}


def test_create_article_requires_image(client, alice):
    res = create_article(client, alice, with_image=False)
    assert res.status_code == 400
    assert res.json()["message"] == "Image upload is required."


def test_get_article_by_id(client, article_id):
    res = client.get(f"/articles/{article_id}")
    assert res.status_code == 200
    assert res.json()["article"]["id"] == article_id


def test_get_missing_article(client):
    res = client.get("/articles/999")
    assert res.status_code == 404
    assert res.json() == {"error": "NotFound", "message": "Article not found"}


# Listing

def test_list_articles_newest_first_with_pagination(client, alice):
    for i in range(3):
        create_article(client, alice, title=f"Post {i}")

    res = client.get("/articles", params={"page": 1, "limit": 2})
    body = res.json()
    assert res.status_code == 200
    assert body["totalData"] == 3
    assert body["totalPages"] == 2
    assert body["currentPage"] == 1
    assert body["limit"] == 2
    assert [a["title"] for a in body["data"]] == ["Post 2", "Post 1"]

    second = client.get("/articles", params={"page": 2, "limit": 2}).json()
    assert [a["title"] for a in second["data"]] == ["Post 0"]


def test_list_defaults(client, article_id):
    body = client.get("/articles").json()
    assert body["currentPage"] == 1
    assert body["limit"] == 10
    assert body["totalData"] == 1


def test_list_filters(client, alice):
    create_article(client, alice, title="Rest design", category="Design", tags='["api"]')
    create_article(client, alice, title="Node tips", content="Event LOOP basics", status="draft", tags='["node", "backend"]')

    def titles(**params):
        return [a["title"] for a in client.get("/articles", params=params).json()["data"]]

    assert titles(category="Design") == ["Rest design"]
    assert titles(status="draft") == ["Node tips"]
    assert titles(tags="backend") == ["Node tips"]
    assert titles(search="event loop") == ["Node tips"]
    assert titles(search="REST") == ["Rest design"]


def test_filter_value_outside_allow_list_gives_empty_page(client, article_id):
    res = client.get("/articles", params={"category": "nonexistent"})
    assert res.status_code == 200
    body = res.json()
    assert body["totalData"] == 0
    assert body["totalPages"] == 0
    assert body["data"] == []


def test_unknown_query_key_is_rejected(client):
    res = client.get("/articles", params={"author": "alice"})
    assert res.status_code == 400
    assert res.json()["error"] == "ValidationError"


@pytest.mark.parametrize("params", [{"page": 0}, {"limit": "ten"}, {"page": -1}])
def test_bad_pagination_is_rejected(client, params):
    assert client.get("/articles", params=params).status_code == 400


def test_my_articles(client, alice, bob):
    create_article(client, alice, title="Alice post")
    create_article(client, bob, title="Bob post")

    body = client.get("/articles/my-articles", headers=auth_header(bob)).json()
    assert body["totalData"] == 1
    assert body["data"][0]["title"] == "Bob post"


# Update / delete

def test_partial_update(client, alice, article_id):
    res = client.patch(f"/articles/{article_id}", json={"title": "New title"}, headers=auth_header(alice))
    assert res.status_code == 200

    article = res.json()["article"]
    assert article["title"] == "New title"
    assert article["content"] == "First post"


def test_update_validates_supplied_fields(client, alice, article_id):
    res = client.patch(f"/articles/{article_id}", json={"tags": ["rust"]}, headers=auth_header(alice))
    assert res.status_code == 400
    assert res.json()["message"] == "Invalid tag(s) provided."


def test_update_rejects_fields_outside_allow_list(client, alice, article_id):
    res = client.patch(f"/articles/{article_id}", json={"author": "mallory"}, headers=auth_header(alice))
    assert res.status_code == 400
    assert client.get(f"/articles/{article_id}").json()["article"]["author"] == "alice"


def test_update_with_empty_body(client, alice, article_id):
    res = client.patch(f"/articles/{article_id}", json={}, headers=auth_header(alice))
    assert res.status_code == 400
    assert res.json()["message"] == "No valid fields provided for update."


def test_update_missing_article(client, alice):
    res = client.patch("/articles/999", json={"title": "x"}, headers=auth_header(alice))
    assert res.status_code == 404


def test_delete_article(client, alice, article_id):
    res = client.delete(f"/articles/{article_id}", headers=auth_header(alice))
    assert res.status_code == 204
    assert res.content == b""
    assert client.get(f"/articles/{article_id}").status_code == 404


def test_delete_missing_article(client, alice):
    assert client.delete("/articles/999", headers=auth_header(alice)).status_code == 404


@pytest.mark.parametrize("method, path, kwargs", [
    ("patch", "/articles/{id}", {"json": {"title": "Hijacked"}}),
    ("delete", "/articles/{id}", {}),
    ("post", "/articles/{id}/like", {}),
    ("post", "/articles/{id}/comments", {"json": {"text": "hi"}}),
    ("get", "/articles/{id}/comments", {}),
])
def test_only_author_may_act_on_article(client, bob, article_id, fetch_article, method, path, kwargs):
    res = client.request(method.upper(), path.format(id=article_id), headers=auth_header(bob), **kwargs)
    assert res.status_code == 403
    assert res.json()["error"] == "Forbidden"

    article = fetch_article(article_id)
    assert article.title == "Hello"
    assert article.likes == 0
    assert article.comments == []


# Likes

def test_like_toggles(client, alice, article_id):
    first = client.post(f"/articles/{article_id}/like", headers=auth_header(alice)).json()
    second = client.post(f"/articles/{article_id}/like", headers=auth_header(alice)).json()

    assert first["message"] == "Article liked"
    assert first["likes"] == 1
    assert second["message"] == "Article unliked"
    assert second["likes"] == 0


def test_like_without_liked_flag_only_counts_up(client, alice, article_id, db_session):
    with db_session() as session:
        article = session.get(Article, article_id)
        article.liked = None
        session.commit()

    for expected in (1, 2):
        body = client.post(f"/articles/{article_id}/like", headers=auth_header(alice)).json()
        assert body["message"] == "Article liked"
        assert body["likes"] == expected
        assert body["liked"] is None


def test_update_accepts_single_bare_tag(client, alice, article_id):
    res = client.patch(f"/articles/{article_id}", json={"tags": "frontend"}, headers=auth_header(alice))
    assert res.status_code == 200
    assert res.json()["article"]["tags"] == ["frontend"]


def test_empty_update_checks_article_and_owner_first(client, alice, bob, article_id):
    assert client.patch("/articles/999", json={}, headers=auth_header(alice)).status_code == 404
    assert client.patch(f"/articles/{article_id}", json={}, headers=auth_header(bob)).status_code == 403


def test_failed_insert_removes_uploaded_image(client, alice, monkeypatch):
    def failing_commit(self):
        raise OperationalError("INSERT INTO articles", {}, Exception("database is locked"))

    monkeypatch.setattr(Session, "commit", failing_commit)
    files_before = set(os.listdir(UPLOAD_DIR)) if os.path.isdir(UPLOAD_DIR) else set()

    res = create_article(TestClient(app, raise_server_exceptions=False), alice)
    assert res.status_code == 500
    assert res.json() == {"error": "InternalError", "message": "Server error"}
    assert set(os.listdir(UPLOAD_DIR)) == files_before
