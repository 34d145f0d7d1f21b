from sqlalchemy import JSON, Column, Integer

from freelancer_access.database import Base

SETTINGS_ROW_ID = 1


class RestrictionSettings(Base):
    """Single-row store for the restriction settings."""

    __tablename__ = "restriction_settings"

    id = Column(Integer, primary_key=True, default=SETTINGS_ROW_ID)
    data = Column(JSON, nullable=False, default=dict)
