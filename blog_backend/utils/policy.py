from blog_backend.utils.errors import Forbidden

# Authors are stored from the authenticated username, so an exact match is the only rule.

def can_modify(actor, owner_username: str) -> bool:
    return actor is not None and owner_username is not None and actor.username == owner_username


def require_owner(actor, owner_username: str, message: str = "You are not allowed to modify this article"):
    if not can_modify(actor, owner_username):
        raise Forbidden(message)
