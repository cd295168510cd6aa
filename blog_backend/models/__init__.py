from blog_backend.models.user import User
from blog_backend.models.article import Article
