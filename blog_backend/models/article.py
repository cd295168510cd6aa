from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, JSON
from datetime import datetime
from blog_backend.db import Base


class Article(Base):
    __tablename__ = "articles"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    author = Column(String(50), index=True, nullable=False) # username, not a foreign key

    category = Column(String(50), nullable=False)
    status = Column(String(20), nullable=False)
    tags = Column(JSON, nullable=False, default=list)
    image = Column(String(255), nullable=False) # /uploads/<filename>

    likes = Column(Integer, nullable=False, default=0)
    liked = Column(Boolean, nullable=True) # NULL: legacy row, likes only go up

    # [{id, user, text, date, likes, liked, replies: [{id, user, text, date, likes, liked}]}]
    comments = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Every UPDATE checks the version it read, so two writers of `comments` can't silently overwrite each other
    version_id = Column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version_id}
