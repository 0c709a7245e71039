"""
Community content: posts and the rows that hang off them.

Children reference their parent with a plain foreign key (no ON DELETE
CASCADE); removing a parent goes through the cascade coordinator, which
deletes children first.
"""

import uuid
from typing import Optional

from sqlalchemy import ForeignKey, Integer, JSON, Text, Uuid, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from fluent_admin.kernel.models.base import Base, TimestampMixin, generate_uuid


class Post(Base, TimestampMixin):
    """A user post in the community feed."""

    __tablename__ = "posts"

    id: Mapped[uuid.UUID] = mapped_column(Uuid(), primary_key=True, default=generate_uuid)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid(), nullable=False, index=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    tag: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    image_urls: Mapped[Optional[list]] = mapped_column(JSON, nullable=True)
    likes_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    comments_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    def __repr__(self) -> str:
        return f"<Post {self.id}>"


class PostLike(Base, TimestampMixin):
    __tablename__ = "post_likes"

    id: Mapped[uuid.UUID] = mapped_column(Uuid(), primary_key=True, default=generate_uuid)
    post_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(), ForeignKey("posts.id"), nullable=False, index=True
    )
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid(), nullable=False, index=True)

    __table_args__ = (UniqueConstraint("post_id", "user_id", name="uq_post_likes_post_user"),)


class Comment(Base, TimestampMixin):
    """A comment on a post."""

    __tablename__ = "comments"

    id: Mapped[uuid.UUID] = mapped_column(Uuid(), primary_key=True, default=generate_uuid)
    post_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(), ForeignKey("posts.id"), nullable=False, index=True
    )
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid(), nullable=False, index=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    likes_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    def __repr__(self) -> str:
        return f"<Comment {self.id} post={self.post_id}>"


class CommentLike(Base, TimestampMixin):
    __tablename__ = "comment_likes"

    id: Mapped[uuid.UUID] = mapped_column(Uuid(), primary_key=True, default=generate_uuid)
    comment_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(), ForeignKey("comments.id"), nullable=False, index=True
    )
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid(), nullable=False, index=True)


class PostCollection(Base, TimestampMixin):
    """A user's bookmark of a post."""

    __tablename__ = "post_collections"

    id: Mapped[uuid.UUID] = mapped_column(Uuid(), primary_key=True, default=generate_uuid)
    post_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(), ForeignKey("posts.id"), nullable=False, index=True
    )
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid(), nullable=False, index=True)
