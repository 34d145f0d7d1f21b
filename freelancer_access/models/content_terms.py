from sqlalchemy import Table, Column, Integer, ForeignKey
from freelancer_access.database import Base

content_terms = Table(
    "content_terms",
    Base.metadata,
    Column("content_id", Integer, ForeignKey("content.id", ondelete="CASCADE"), primary_key=True),
    Column("term_id", Integer, ForeignKey("terms.id", ondelete="CASCADE"), primary_key=True),
)
