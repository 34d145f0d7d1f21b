from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String

from freelancer_access.database import Base


class AccessLogEntry(Base):
    """A denied direct-access attempt. Capped list, newest first."""

    __tablename__ = "access_logs"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    time = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    user_id = Column(Integer, nullable=True)
    user_login = Column(String, nullable=False, default="Unknown")
    content_id = Column(Integer, nullable=False)
    content_title = Column(String, nullable=False, default="Unknown")
    ip = Column(String(64), nullable=False, default="Unknown")
