from typing import Optional
from fastapi import APIRouter, Depends, File, Form, Request, Response, UploadFile
from sqlalchemy.orm import Session
from blog_backend.db import get_db
from blog_backend.models import User
from blog_backend.schemas.article_schemas import ArticleUpdate, CommentText
from blog_backend.services import article_service, comment_service
from blog_backend.utils.auth_utils import get_current_user

article_router = APIRouter(prefix="/articles", tags=["articles"])

# Articles
@article_router.post("", status_code=201)
def create_article(
    title: Optional[str] = Form(None),
    content: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    status: Optional[str] = Form(None),
    tags: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    form = {"title": title, "content": content, "category": category, "status": status, "tags": tags}
    return article_service.create_article(user, form, image, db)

@article_router.get("")
def get_articles(request: Request, db: Session = Depends(get_db)):
    return article_service.list_articles(dict(request.query_params), db)

@article_router.get("/my-articles")
def get_my_articles(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return article_service.list_my_articles(user, db)

@article_router.get("/{article_id}")
def get_article(article_id: int, db: Session = Depends(get_db)):
    return article_service.get_article(article_id, db)

@article_router.patch("/{article_id}")
def update_article(article_id: int, body: ArticleUpdate, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return article_service.update_article(user, article_id, body, db)

@article_router.delete("/{article_id}", status_code=204)
def delete_article(article_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    article_service.delete_article(user, article_id, db)
    return Response(status_code=204)

@article_router.post("/{article_id}/like")
def like_article(article_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return article_service.like_article(user, article_id, db)

# Comments
@article_router.post("/{article_id}/comments", status_code=201)
def post_comment(article_id: int, body: CommentText, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return comment_service.post_comment(user, article_id, body.text, db)

@article_router.get("/{article_id}/comments")
def get_comments(article_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return comment_service.get_comments(user, article_id, db)

@article_router.post("/{article_id}/comments/{comment_id}/reply", status_code=201)
def reply_comment(article_id: int, comment_id: int, body: CommentText, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return comment_service.reply_comment(user, article_id, comment_id, body.text, db)

@article_router.post("/{article_id}/comments/{comment_id}/like")
def like_comment(article_id: int, comment_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return comment_service.like_node(user, article_id, comment_id, None, db)

@article_router.post("/{article_id}/comments/{comment_id}/replies/{reply_id}/like")
def like_reply(article_id: int, comment_id: int, reply_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return comment_service.like_node(user, article_id, comment_id, reply_id, db)

@article_router.put("/{article_id}/comments/{comment_id}")
def edit_comment(article_id: int, comment_id: int, body: CommentText, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return comment_service.edit_node(user, article_id, comment_id, None, body.text, db)

@article_router.put("/{article_id}/comments/{comment_id}/replies/{reply_id}")
def edit_reply(article_id: int, comment_id: int, reply_id: int, body: CommentText, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return comment_service.edit_node(user, article_id, comment_id, reply_id, body.text, db)

@article_router.delete("/{article_id}/comments/{comment_id}")
def delete_comment(article_id: int, comment_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return comment_service.delete_node(user, article_id, comment_id, None, db)

@article_router.delete("/{article_id}/comments/{comment_id}/replies/{reply_id}")
def delete_reply(article_id: int, comment_id: int, reply_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return comment_service.delete_node(user, article_id, comment_id, reply_id, db)
