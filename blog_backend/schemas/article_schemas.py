from pydantic import BaseModel, ConfigDict
from typing import Any, Optional

class ArticleUpdate(BaseModel):
    # Only these keys can reach the UPDATE; anything else is a 400
    model_config = ConfigDict(extra="forbid")

    title: Optional[Any] = None
    content: Optional[Any] = None
    category: Optional[Any] = None
    status: Optional[Any] = None
    tags: Optional[Any] = None

class CommentText(BaseModel):
    text: Optional[str] = None
