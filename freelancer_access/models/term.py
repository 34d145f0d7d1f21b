from sqlalchemy import Column, Integer, String, PrimaryKeyConstraint
from sqlalchemy.orm import relationship
from freelancer_access.database import Base
from freelancer_access.models.content_terms import content_terms


class Term(Base):
    """A term of a taxonomy, e.g. the "News" term of "category"."""

    __tablename__ = "terms"
    id = Column(Integer, primary_key=True, index=True)
    taxonomy = Column(String(32), nullable=False, index=True)
    name = Column(String, nullable=False)

    contents = relationship("Content", secondary=content_terms, back_populates="terms")


class TaxonomyObjectType(Base):
    """Registers which content types a taxonomy can be attached to."""

    __tablename__ = "taxonomy_object_types"
    taxonomy = Column(String(32), nullable=False)
    content_type = Column(String(20), nullable=False)

    __table_args__ = (PrimaryKeyConstraint("taxonomy", "content_type"),)
