import json
import re
from blog_backend.utils.errors import ValidationError

# Allowed categories, statuses and tags
ALLOWED_CATEGORIES = ["Programming", "Technology", "Design", "Web Developement"]
ALLOWED_STATUSES = ["draft", "published", "achieve"]
ALLOWED_TAGS = ["api", "node", "frontend", "backend"]

EMAIL_REGEX = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
PASSWORD_REGEX = re.compile(r'^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[!@#$%^&*(),.?":{}|<>]).{8,}$')
PASSWORD_RULES = "Password must be at least 8 characters long and include uppercase, lowercase, number, and special character"


def is_valid_email(email: str) -> bool:
    return bool(email) and EMAIL_REGEX.match(email) is not None


def is_strong_password(password: str) -> bool:
    return bool(password) and PASSWORD_REGEX.match(password) is not None


def is_blank(value) -> bool:
    return not isinstance(value, str) or not value.strip()


def parse_form_value(value):
    """Form fields may carry JSON (e.g. tags='["api","node"]'); fall back to the raw string."""
    if value is None:
        return None
    try:
        return json.loads(value)
    except (TypeError, ValueError):
        return value


def parse_text_field(value):
    # "123" parses to an int, but a title is still the text "123"
    parsed = parse_form_value(value)
    return parsed if isinstance(parsed, str) else value


def normalize_tags(tags):
    # A single bare tag counts as a one-item list
    if isinstance(tags, str):
        return [tags] if tags.strip() else []
    return tags


def parse_tags_field(value):
    return normalize_tags(parse_form_value(value))


# Field validators shared by create and partial update

def validate_title(title):
    if is_blank(title):
        raise ValidationError("Title is required.")
    return title


def validate_content(content):
    if is_blank(content):
        raise ValidationError("Content is required.")
    return content


def validate_category(category):
    if is_blank(category):
        raise ValidationError("Category is required.")
    if category not in ALLOWED_CATEGORIES:
        raise ValidationError("Invalid category provided.")
    return category


def validate_status(status):
    if is_blank(status):
        raise ValidationError("Status is required.")
    if status not in ALLOWED_STATUSES:
        raise ValidationError("Invalid status provided.")
    return status


def validate_tags(tags):
    if not tags or not isinstance(tags, list):
        raise ValidationError("At least one tag is required.")
    if not all(isinstance(tag, str) and tag in ALLOWED_TAGS for tag in tags):
        raise ValidationError("Invalid tag(s) provided.")
    return tags


def validate_tags_input(tags):
    return validate_tags(normalize_tags(tags))


ARTICLE_FIELD_VALIDATORS = {
    "title": validate_title,
    "content": validate_content,
    "category": validate_category,
    "status": validate_status,
    "tags": validate_tags_input,
}
