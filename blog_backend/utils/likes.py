from typing import Optional, Tuple


def apply_like(likes: int, liked: Optional[bool]) -> Tuple[int, Optional[bool]]:
    """Next (likes, liked) pair for a like request.

    With a liked flag the call toggles and the counter never drops below
    zero. Without one (None) the counter only goes up.
    """
    likes = likes or 0
    if liked is None:
        return likes + 1, None
    if liked:
        return max(likes - 1, 0), False
    return likes + 1, True
