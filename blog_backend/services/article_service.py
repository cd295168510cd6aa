import math
from fastapi import UploadFile
from sqlalchemy import String, cast, desc, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError
from blog_backend.models import Article, User
from blog_backend.schemas.article_schemas import ArticleUpdate
from blog_backend.utils.errors import ValidationError, NotFound, Conflict, InternalError
from blog_backend.utils.likes import apply_like
from blog_backend.utils.logging_utils import get_logger
from blog_backend.utils.policy import require_owner
from blog_backend.utils.uploads import save_upload, delete_upload
from blog_backend.utils.validators import (
    ALLOWED_CATEGORIES, ALLOWED_STATUSES, ALLOWED_TAGS, ARTICLE_FIELD_VALIDATORS,
    parse_text_field, parse_tags_field,
    validate_title, validate_content, validate_category, validate_status, validate_tags,
)

logger = get_logger("articles")

LIST_QUERY_KEYS = {"page", "limit", "search", "category", "status", "tags"}
DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


def article_to_dict(article: Article):
    return {
        "id": article.id,
        "title": article.title,
        "content": article.content,
        "author": article.author,
        "category": article.category,
        "status": article.status,
        "tags": article.tags,
        "image": article.image,
        "likes": article.likes,
        "liked": article.liked,
        "comments": article.comments,
        "created_at": article.created_at.isoformat() if article.created_at else None,
        "updated_at": article.updated_at.isoformat() if article.updated_at else None,
    }


def get_article_or_404(article_id: int, db: Session) -> Article:
    article = db.query(Article).filter_by(id=article_id).first()
    if not article:
        raise NotFound("Article not found")
    return article


def save_changes(db: Session):
    # version_id mismatch: someone else updated or deleted the row since we read it
    try:
        db.commit()
    except StaleDataError:
        db.rollback()
        raise Conflict("Article was modified concurrently, retry the request")


# CREATE
def create_article(user: User, form: dict, image: UploadFile, db: Session):
    title = parse_text_field(form.get("title"))
    content = parse_text_field(form.get("content"))
    category = parse_text_field(form.get("category"))
    status = parse_text_field(form.get("status"))
    tags = parse_tags_field(form.get("tags"))

    validate_title(title)
    validate_content(content)
    validate_category(category)
    validate_status(status)
    validate_tags(tags)
    if image is None or not image.filename:
        raise ValidationError("Image upload is required.")

    try:
        image_path = save_upload(image)
    except OSError:
        logger.exception("Image upload failed")
        raise InternalError()

    new_article = Article(
        title=title,
        content=content,
        author=user.username,
        category=category,
        status=status,
        tags=tags,
        image=image_path,
        likes=0,
        liked=False,
        comments=[],
    )
    db.add(new_article)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        delete_upload(image_path)
        raise
    db.refresh(new_article)

    logger.info(f"Article created | id={new_article.id} author={user.username}")
    return {"message": "Article created successfully", "article": article_to_dict(new_article)}


# READ
def _parse_positive_int(value, name, default):
    if value is None:
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be a positive integer")
    if number < 1:
        raise ValidationError(f"{name} must be a positive integer")
    return number


def _page(total, page, limit, data):
    return {
        "totalData": total,
        "totalPages": math.ceil(total / limit) if total else 0,
        "currentPage": page,
        "limit": limit,
        "data": data,
    }


def list_articles(params: dict, db: Session):
    unknown = set(params) - LIST_QUERY_KEYS
    if unknown:
        raise ValidationError(f"Invalid query parameter(s): {', '.join(sorted(unknown))}")

    page = _parse_positive_int(params.get("page"), "page", DEFAULT_PAGE)
    limit = _parse_positive_int(params.get("limit"), "limit", DEFAULT_LIMIT)

    category = params.get("category")
    status = params.get("status")
    tag = params.get("tags")
    search = params.get("search")

    # A filter value outside its allow-list matches nothing; that is an empty page, not an error
    if (category is not None and category not in ALLOWED_CATEGORIES) \
            or (status is not None and status not in ALLOWED_STATUSES) \
            or (tag is not None and tag not in ALLOWED_TAGS):
        return _page(0, page, limit, [])

    query = db.query(Article)
    if category is not None:
        query = query.filter(Article.category == category)
    if status is not None:
        query = query.filter(Article.status == status)
    if tag is not None:
        # tags is a JSON list; allow-listed values contain no quotes or wildcards
        query = query.filter(cast(Article.tags, String).like(f'%"{tag}"%'))
    if search:
        query = query.filter(or_(
            Article.title.icontains(search, autoescape=True),
            Article.content.icontains(search, autoescape=True),
        ))

    total = query.count()
    articles = (
        query.order_by(desc(Article.created_at), desc(Article.id))
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )

    return _page(total, page, limit, [article_to_dict(a) for a in articles])


def list_my_articles(user: User, db: Session):
    articles = (
        db.query(Article)
        .filter_by(author=user.username)
        .order_by(desc(Article.created_at), desc(Article.id))
        .all()
    )
    return {"totalData": len(articles), "data": [article_to_dict(a) for a in articles]}


def get_article(article_id: int, db: Session):
    return {"article": article_to_dict(get_article_or_404(article_id, db))}


# UPDATE
def update_article(user: User, article_id: int, req: ArticleUpdate, db: Session):
    article = get_article_or_404(article_id, db)
    require_owner(user, article.author, "You can only update your own articles")

    updates = req.model_dump(exclude_unset=True)
    if not updates:
        raise ValidationError("No valid fields provided for update.")

    for field, value in updates.items():
        setattr(article, field, ARTICLE_FIELD_VALIDATORS[field](value))

    save_changes(db)
    db.refresh(article)

    logger.info(f"Article updated | id={article.id} fields={','.join(updates)}")
    return {"message": "Article updated successfully", "article": article_to_dict(article)}


# DELETE
def delete_article(user: User, article_id: int, db: Session):
    article = get_article_or_404(article_id, db)
    require_owner(user, article.author, "You can only delete your own articles")

    db.delete(article)
    save_changes(db)

    logger.info(f"Article deleted | id={article_id}")


# LIKE
def like_article(user: User, article_id: int, db: Session):
    article = get_article_or_404(article_id, db)
    require_owner(user, article.author, "You can only like your own articles")

    article.likes, liked = apply_like(article.likes, article.liked)
    if article.liked is not None:
        article.liked = liked

    save_changes(db)

    # Counter-only rows have no unlike
    message = "Article unliked" if article.liked is False else "Article liked"
    return {"message": message, "likes": article.likes, "liked": article.liked}
