"""
AccessGrant Model

One row per (user, content key). The content key is a post type slug
("page", "post", "product", ...), "tax_<taxonomy>" for term grants or
"media" for explicitly assigned attachments. ``ids`` holds the sanitized
list of positive integer IDs; writing an empty list removes the row.
"""

from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, UniqueConstraint

from freelancer_access.database import Base


class AccessGrant(Base):
    __tablename__ = "access_grants"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    content_key = Column(String(64), nullable=False)
    ids = Column(JSON, nullable=False, default=list)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    __table_args__ = (UniqueConstraint("user_id", "content_key", name="uq_access_grant_user_key"),)

    def __repr__(self) -> str:
        return f"<AccessGrant(user={self.user_id}, key={self.content_key!r}, ids={self.ids})>"
