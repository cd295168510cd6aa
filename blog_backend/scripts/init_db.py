# creates database schema
from blog_backend.db import Base, engine
from blog_backend.models import User, Article

# Drop all tables
Base.metadata.drop_all(engine)

# Create tables based on existing models
Base.metadata.create_all(bind=engine)
print("Database schema created.")
