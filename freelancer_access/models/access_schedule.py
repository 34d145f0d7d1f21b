from sqlalchemy import Column, Date, ForeignKey, Integer

from freelancer_access.database import Base


class AccessSchedule(Base):
    """Optional per-user window; a missing row means access is always active."""

    __tablename__ = "access_schedules"

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)

    def __repr__(self) -> str:
        return f"<AccessSchedule(user={self.user_id}, start={self.start_date}, end={self.end_date})>"
