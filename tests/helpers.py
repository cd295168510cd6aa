PASSWORD = "Abcdefg1!"


def register(client, username, email=None, password=PASSWORD):
    return client.post("/auth/register", json={
        "username": username,
        "email": email or f"{username}@example.com",
        "password": password,
    })


def login(client, username, email=None, password=PASSWORD):
    res = client.post("/auth/login", json={"email": email or f"{username}@example.com", "password": password})
    return res.json().get("token")


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}


def create_article(client, token, with_image=True, **overrides):
    data = {
        "title": "Hello",
        "content": "First post",
        "category": "Programming",
        "status": "published",
        "tags": '["api", "node"]',
    }
    data.update(overrides)
    files = {"image": ("cover.png", b"\x89PNG fake", "image/png")} if with_image else None
    return client.post("/articles", data=data, files=files, headers=auth_header(token))
