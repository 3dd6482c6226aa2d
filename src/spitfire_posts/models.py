"""Post entity and request body models."""

from pydantic import BaseModel, ConfigDict


class PostInput(BaseModel):
    """Body accepted by create and update.

    Absent fields fall back to their defaults; a missing ``title`` becomes
    empty and is rejected by the handlers like an explicit ``""``. Strict
    mode rejects e.g. ``"published": "yes"``.
    """

    model_config = ConfigDict(strict=True)

    title: str = ""
    published: bool = False
    description: str = ""


class Post(BaseModel):
    """A stored post. ``id`` is assigned by the store and never changes."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    published: bool = False
    description: str = ""
