from sqlalchemy import Column, Integer, String, Text, ForeignKey, DateTime, Enum, Index
from sqlalchemy.orm import relationship
from freelancer_access.database import Base
from freelancer_access.models.content_terms import content_terms
from datetime import datetime
import enum


class ContentStatus(str, enum.Enum):
    DRAFT = "draft"
    PENDING = "pending"
    PRIVATE = "private"
    PUBLISHED = "publish"
    INHERIT = "inherit"  # attachments inherit the status of their parent


class Content(Base):
    """Any content item: pages, posts, custom types and attachments."""

    __tablename__ = "content"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    content_type = Column(String(20), nullable=False, default="post")
    title = Column(String, nullable=False, default="")
    body = Column(Text, nullable=False, default="")
    status = Column(Enum(ContentStatus), default=ContentStatus.DRAFT, nullable=False)
    author_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    # For attachments: the content item the file was uploaded to
    parent_id = Column(Integer, ForeignKey("content.id", ondelete="SET NULL"), nullable=True)
    featured_image_id = Column(Integer, ForeignKey("content.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    author = relationship("User", back_populates="contents", foreign_keys=[author_id])
    terms = relationship("Term", secondary=content_terms, back_populates="contents")

    __table_args__ = (
        Index("idx_content_type", "content_type"),
        Index("idx_content_parent", "parent_id"),
        Index("idx_content_author", "author_id"),
    )

    def __repr__(self) -> str:
        return f"<Content(id={self.id}, type={self.content_type!r}, title={self.title!r})>"
