from sqlalchemy.orm import Session
from blog_backend.models import User
from blog_backend.services.article_service import get_article_or_404, save_changes
from blog_backend.utils import comment_tree
from blog_backend.utils.errors import ValidationError, Forbidden
from blog_backend.utils.logging_utils import get_logger
from blog_backend.utils.policy import can_modify, require_owner
from blog_backend.utils.validators import is_blank

logger = get_logger("comments")

# Each mutation reads the whole comments document, edits a copy and writes it back.
# The Article version column turns a lost update into a 409.


def post_comment(user: User, article_id: int, text, db: Session):
    if is_blank(text):
        raise ValidationError("Comment text is required.")

    article = get_article_or_404(article_id, db)
    require_owner(user, article.author, "You can only comment on your own articles")

    article.comments, comment = comment_tree.append_comment(article.comments, user.username, text.strip())
    save_changes(db)

    logger.info(f"Comment added | article={article_id} comment={comment['id']}")
    return {"message": "Comment added successfully", "comment": comment}


def get_comments(user: User, article_id: int, db: Session):
    article = get_article_or_404(article_id, db)
    require_owner(user, article.author, "You can only view comments on your own articles")

    comments = [c for c in article.comments or [] if c.get("user") == user.username]
    return {"comments": comments}


def reply_comment(user: User, article_id: int, comment_id: int, text, db: Session):
    if is_blank(text):
        raise ValidationError("Reply text is required.")

    article = get_article_or_404(article_id, db)
    require_owner(user, article.author, "You can only reply on your own articles")

    # Raises NotFound before anything is assigned back
    article.comments, reply = comment_tree.append_reply(article.comments, comment_id, user.username, text.strip())
    save_changes(db)

    logger.info(f"Reply added | article={article_id} comment={comment_id} reply={reply['id']}")
    return {"message": "Reply added successfully", "reply": reply}


def like_node(user: User, article_id: int, comment_id: int, reply_id: int, db: Session):
    article = get_article_or_404(article_id, db)
    require_owner(user, article.author, "You can only like comments on your own articles")

    article.comments, node = comment_tree.toggle_node_like(article.comments, comment_id, reply_id)
    save_changes(db)

    noun = "Reply" if reply_id is not None else "Comment"
    action = "unliked" if node.get("liked") is False else "liked"
    return {"message": f"{noun} {action}", "likes": node["likes"], "liked": node.get("liked")}


def edit_node(user: User, article_id: int, comment_id: int, reply_id: int, text, db: Session):
    noun = "Reply" if reply_id is not None else "Comment"
    if is_blank(text):
        raise ValidationError(f"{noun} text is required.")

    article = get_article_or_404(article_id, db)
    node = comment_tree.find_node(article.comments or [], comment_id, reply_id)
    require_owner(user, node.get("user"), f"You can only edit your own {noun.lower()}s")

    article.comments, node = comment_tree.edit_node(article.comments, comment_id, reply_id, text.strip())
    save_changes(db)

    logger.info(f"{noun} edited | article={article_id} comment={comment_id} reply={reply_id}")
    return {"message": f"{noun} updated successfully", noun.lower(): node}


def delete_node(user: User, article_id: int, comment_id: int, reply_id: int, db: Session):
    noun = "Reply" if reply_id is not None else "Comment"

    article = get_article_or_404(article_id, db)
    node = comment_tree.find_node(article.comments or [], comment_id, reply_id)
    # Node author, or the article author moderating their own article
    if not (can_modify(user, node.get("user")) or can_modify(user, article.author)):
        raise Forbidden(f"You can only delete your own {noun.lower()}s")

    article.comments, _ = comment_tree.remove_node(article.comments, comment_id, reply_id)
    save_changes(db)

    logger.info(f"{noun} deleted | article={article_id} comment={comment_id} reply={reply_id}")
    return {"message": f"{noun} deleted successfully"}
