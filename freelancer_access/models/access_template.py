"""Reusable bundles of grants that can be applied to any user."""

from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, String, Text

from freelancer_access.database import Base


class AccessTemplate(Base):
    __tablename__ = "access_templates"

    id = Column(String(40), primary_key=True)  # "tpl_<uuid4>"
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=False, default="")
    # {"page": [1, 2], "tax_category": [7], "media": [40]}
    content = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    modified_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
