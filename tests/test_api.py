import pytest
from fastapi.testclient import TestClient

from app.auth.storage import MemoryStorage
from app.main import create_app

from conftest import mock_settings


@pytest.fixture
def client():
    app = create_app(mock_settings(), storage=MemoryStorage())
    with TestClient(app) as client:
        yield client


def sign_in(client, email, password="user123"):
    response = client.post("/api/auth/signin", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()


def test_health(client):
    assert client.get("/health").json() == {"status": "ok", "backend": "mock"}


def test_unknown_route_is_json_404(client):
    response = client.get("/api/nothing-here")

    assert response.status_code == 404
    assert "detail" in response.json()


def test_sign_in_flow(client):
    assert client.get("/api/auth/session").json() is None

    bad = client.post("/api/auth/signin", json={"email": "john@example.com", "password": "nope"})
    assert bad.status_code == 401
    assert bad.json()["detail"] == "Invalid email or password"

    session = sign_in(client, "john@example.com")
    assert session["user"]["id"] == "user-2"
    assert "expiresAt" in session
    assert "password_hash" not in session["user"]
    assert client.get("/api/auth/session").json()["user"]["email"] == "john@example.com"

    assert client.post("/api/auth/signout").status_code == 200
    assert client.get("/api/auth/session").json() is None


def test_sign_up_conflict_and_oauth(client):
    created = client.post("/api/auth/signup", json={"email": "new@example.com", "password": "pw", "full_name": "New"})
    assert created.status_code == 201
    assert created.json()["user"]["role"] == "user"

    again = client.post("/api/auth/signup", json={"email": "new@example.com", "password": "pw"})
    assert again.status_code == 409

    assert client.post("/api/auth/oauth/github").status_code == 401


def test_public_reads(client):
    assert len(client.get("/api/projects").json()) == 6
    assert len(client.get("/api/projects/featured").json()) == 3
    assert client.get("/api/projects/weather-dashboard").json()["id"] == "project-3"
    assert client.get("/api/projects/missing").status_code == 404
    assert len(client.get("/api/blog/posts").json()) == 4
    assert client.get("/api/comments/project/project-1").json()[0]["id"] == "comment-2"
    assert client.get("/api/likes/project/project-1").json() == {"count": 2, "has_liked": False}


def test_protected_routes_need_sign_in(client):
    assert client.get("/api/profile").status_code == 401
    assert client.post("/api/likes/project/project-1/toggle").status_code == 401
    assert client.post("/api/comments/project/project-1", json={"content": "hi"}).status_code == 401


def test_comment_lifecycle(client):
    sign_in(client, "jane@example.com")

    created = client.post("/api/comments/blog/blog-4", json={"content": "  First!  "})
    assert created.status_code == 201
    comment = created.json()
    assert comment["content"] == "First!"

    assert client.post("/api/comments/blog/blog-4", json={"content": "   "}).status_code == 400

    edited = client.put(f"/api/comments/{comment['id']}", json={"content": "Second thoughts"})
    assert edited.status_code == 200
    assert edited.json()["content"] == "Second thoughts"
    assert edited.json()["updated_at"] != edited.json()["created_at"]

    assert client.delete("/api/comments/comment-1").status_code == 403
    assert client.delete(f"/api/comments/{comment['id']}").status_code == 200
    assert client.delete(f"/api/comments/{comment['id']}").status_code == 404


def test_like_toggle(client):
    sign_in(client, "john@example.com")

    first = client.post("/api/likes/project/project-1/toggle").json()
    assert first == {"liked": False, "count": 1}
    second = client.post("/api/likes/project/project-1/toggle").json()
    assert second == {"liked": True, "count": 2}

    mine = client.get("/api/likes/me").json()
    assert {like["entity_id"] for like in mine} == {"project-1", "project-2", "project-4"}


def test_profile_update(client):
    sign_in(client, "john@example.com")

    updated = client.put("/api/profile", json={"bio": "Hello", "username": "john_d"})
    assert updated.status_code == 200
    assert updated.json()["username"] == "john_d"
    assert client.get("/api/auth/session").json()["user"]["bio"] == "Hello"

    assert client.put("/api/profile", json={"username": "janesmith"}).status_code == 409
    assert client.get("/api/users/username-available", params={"username": "john_d"}).json()["available"] is True

    avatar = client.post("/api/profile/avatar").json()["avatar_url"]
    assert "seed=user-2-" in avatar


def test_admin_only_routes(client):
    sign_in(client, "john@example.com")
    assert client.get("/api/users").status_code == 403
    assert client.post("/api/projects", json={"slug": "x", "title": "X"}).status_code == 403

    sign_in(client, "admin@example.com", "admin123")
    assert len(client.get("/api/users").json()) == 3
    assert client.delete("/api/users/user-1").status_code == 403

    created = client.post("/api/projects", json={"slug": "cli-tool", "title": "CLI tool", "technologies": ["Python"]})
    assert created.status_code == 201
    assert client.post("/api/projects", json={"slug": "cli-tool", "title": "Again"}).status_code == 409
    assert client.post("/api/projects", json={"slug": "Not A Slug", "title": "Bad"}).status_code == 400

    assert client.put("/api/projects/cli-tool", json={"featured": True}).json()["featured"] is True
    assert client.delete("/api/projects/cli-tool").status_code == 200

    assert client.put("/api/users/user-3/role", json={"role": "admin"}).json()["role"] == "admin"


def test_drafts_over_http(client):
    sign_in(client, "admin@example.com", "admin123")
    client.post("/api/blog/posts", json={"slug": "secret", "title": "Secret", "published": False})
    assert client.get("/api/blog/posts/secret").status_code == 200

    client.post("/api/auth/signout")
    assert client.get("/api/blog/posts/secret").status_code == 404
    assert client.get("/api/blog/posts", params={"include_drafts": True}).status_code == 403


def test_view_counter_needs_backend(client):
    assert client.post("/api/projects/ecommerce-platform/views").status_code == 503
