# Models package init
# Both mappers must be registered before either relationship() is configured.
from bloglist.models.blog import Blog
from bloglist.models.user import User

__all__ = ["Blog", "User"]
