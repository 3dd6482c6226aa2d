"""Post store contract and an in-memory implementation.

The service treats persistence as an external collaborator: anything that
implements ``PostStore`` can be passed to ``create_app``. Implementations
report a missing identifier with ``PostNotFoundError`` and any other failure
with ``StoreError`` (or a plain exception, which handlers wrap).
"""

import logging
import uuid
from typing import Protocol, runtime_checkable

from spitfire_posts.exceptions import PostNotFoundError
from spitfire_posts.models import Post

logger = logging.getLogger(__name__)


@runtime_checkable
class PostStore(Protocol):
    """CRUD operations over Post records, keyed by an opaque string id."""

    async def find_all(self) -> list[Post]: ...

    async def create(self, title: str, published: bool, description: str) -> Post: ...

    async def find_by_id_and_update(
        self,
        post_id: str,
        title: str,
        published: bool,
        description: str,
    ) -> Post: ...

    async def find_by_id_and_delete(self, post_id: str) -> Post: ...


class InMemoryPostStore:
    """Dict-backed store preserving insertion order.

    No method awaits between reading and writing ``_posts``, so each
    operation is atomic on a single event loop.
    """

    def __init__(self, posts: list[Post] | None = None) -> None:
        self._posts: dict[str, Post] = {post.id: post for post in posts or ()}

    def __len__(self) -> int:
        return len(self._posts)

    async def find_all(self) -> list[Post]:
        return list(self._posts.values())

    async def create(self, title: str, published: bool, description: str) -> Post:
        post = Post(
            id=uuid.uuid4().hex,
            title=title,
            published=published,
            description=description,
        )
        self._posts[post.id] = post
        logger.debug("Created post", extra={"post_id": post.id})
        return post

    async def find_by_id_and_update(
        self,
        post_id: str,
        title: str,
        published: bool,
        description: str,
    ) -> Post:
        existing = self._posts.get(post_id)
        if existing is None:
            raise PostNotFoundError(post_id)

        updated = existing.model_copy(
            update={"title": title, "published": published, "description": description}
        )
        self._posts[post_id] = updated
        logger.debug("Updated post", extra={"post_id": post_id})
        return updated

    async def find_by_id_and_delete(self, post_id: str) -> Post:
        try:
            post = self._posts.pop(post_id)
        except KeyError:
            raise PostNotFoundError(post_id) from None
        logger.debug("Deleted post", extra={"post_id": post_id})
        return post
