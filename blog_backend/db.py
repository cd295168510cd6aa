from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from blog_backend.config import DATABASE_URL

connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, connect_args=connect_args)
sessionlocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


# Dependency for a per-request session
def get_db():
    db = sessionlocal()
    try:
        yield db
    finally:
        db.close()
