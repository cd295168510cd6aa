# blog_backend/scripts/seed_demo_data.py

from sqlalchemy.orm import Session
from blog_backend.db import engine
from blog_backend.models import User, Article
from blog_backend.utils.auth_utils import hash_password

DEMO_USER = {"username": "demo", "email": "demo@example.com", "password": "Demo1234!"}

articles = [
    {"title": "Designing a REST API", "content": "Resources, verbs and status codes.", "category": "Programming", "status": "published", "tags": ["api", "backend"]},
    {"title": "Styling forms", "content": "Layout tricks for the frontend.", "category": "Design", "status": "draft", "tags": ["frontend"]},
]

with Session(engine) as session:
    user = session.query(User).filter_by(email=DEMO_USER["email"]).first()
    if not user:
        user = User(username=DEMO_USER["username"], email=DEMO_USER["email"], password_hash=hash_password(DEMO_USER["password"]))
        session.add(user)

    for art in articles:
        exists = session.query(Article).filter_by(title=art["title"], author=DEMO_USER["username"]).first()
        if not exists:
            session.add(Article(author=DEMO_USER["username"], image="/uploads/placeholder.png", likes=0, liked=False, comments=[], **art))
    session.commit()
    print("Demo user and articles seeded.")
