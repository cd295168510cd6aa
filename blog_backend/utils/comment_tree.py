"""
In-memory edits of an article's nested comments document.

The document is a list of comments, each with a list of replies:

    [{"id": 1718000000000, "user": "alice", "text": "...", "date": "...",
      "likes": 0, "liked": False, "replies": [{"id": ..., "user": ..., ...}]}]

Every function works on a deep copy and returns the new list, so the caller
can assign it back to `Article.comments` and persist the whole document.
Paths are resolved front-to-back and the first match wins.
"""

import copy
import time
from datetime import datetime, timezone
from blog_backend.utils.errors import NotFound
from blog_backend.utils.likes import apply_like


def _now_ms() -> int:
    return int(time.time() * 1000)


def _iso_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _all_ids(comments):
    for comment in comments:
        yield comment.get("id")
        for reply in comment.get("replies") or []:
            yield reply.get("id")


def next_node_id(comments) -> int:
    """Millisecond timestamp, moved past any id already in this document."""
    node_id = _now_ms()
    taken = [i for i in _all_ids(comments) if isinstance(i, int)]
    if taken and node_id <= max(taken):
        node_id = max(taken) + 1
    return node_id


def find_comment(comments, comment_id):
    for comment in comments:
        if comment.get("id") == comment_id:
            return comment
    return None


def find_reply(comment, reply_id):
    for reply in comment.get("replies") or []:
        if reply.get("id") == reply_id:
            return reply
    return None


def find_node(comments, comment_id, reply_id=None):
    """Resolve (comment_id) or (comment_id, reply_id) to a node, raising NotFound."""
    comment = find_comment(comments, comment_id)
    if comment is None:
        raise NotFound("Comment not found")
    if reply_id is None:
        return comment

    reply = find_reply(comment, reply_id)
    if reply is None:
        raise NotFound("Reply not found")
    return reply


def append_comment(comments, user: str, text: str):
    new_comments = copy.deepcopy(comments or [])
    comment = {
        "id": next_node_id(new_comments),
        "user": user,
        "text": text,
        "date": _iso_now(),
        "likes": 0,
        "liked": False,
        "replies": [],
    }
    new_comments.append(comment)
    return new_comments, comment


def append_reply(comments, comment_id, user: str, text: str):
    new_comments = copy.deepcopy(comments or [])
    comment = find_node(new_comments, comment_id)

    reply = {
        "id": next_node_id(new_comments),
        "user": user,
        "text": text,
        "date": _iso_now(),
        "likes": 0,
        "liked": False,
    }
    comment["replies"] = (comment.get("replies") or []) + [reply]
    return new_comments, reply


def edit_node(comments, comment_id, reply_id, text: str):
    new_comments = copy.deepcopy(comments or [])
    node = find_node(new_comments, comment_id, reply_id)
    node["text"] = text
    node["edited_at"] = _iso_now()
    return new_comments, node


def remove_node(comments, comment_id, reply_id=None):
    new_comments = copy.deepcopy(comments or [])
    comment = find_node(new_comments, comment_id)

    if reply_id is None:
        new_comments.remove(comment)
        return new_comments, comment

    reply = find_node(new_comments, comment_id, reply_id)
    comment["replies"].remove(reply)
    return new_comments, reply


def toggle_node_like(comments, comment_id, reply_id=None):
    new_comments = copy.deepcopy(comments or [])
    node = find_node(new_comments, comment_id, reply_id)

    # Nodes written before the liked flag existed only count up
    node["likes"], liked = apply_like(node.get("likes", 0), node.get("liked"))
    if liked is not None:
        node["liked"] = liked
    return new_comments, node
