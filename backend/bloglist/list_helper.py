"""
Aggregate helpers over lists of blogs.

Each helper accepts any sequence of mappings or objects exposing `likes`
(plain dicts from JSON, BlogResponse models or ORM rows).
"""

from functools import reduce
from typing import Any, Optional, Sequence


def _likes(blog: Any) -> int:
    if isinstance(blog, dict):
        return blog.get("likes", 0) or 0
    return getattr(blog, "likes", 0) or 0


def dummy(blogs: Sequence[Any]) -> int:
    return 1


def total_likes(blogs: Sequence[Any]) -> int:
    return sum(_likes(blog) for blog in blogs)


def favorite_blog(blogs: Sequence[Any]) -> Optional[Any]:
    """Returns the blog with the most likes, the later one on a tie, None if empty."""
    if not blogs:
        return None
    return reduce(lambda prev, current: prev if _likes(prev) > _likes(current) else current, blogs)
