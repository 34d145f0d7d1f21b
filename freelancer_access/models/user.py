from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from freelancer_access.database import Base
from freelancer_access.models.user_roles import user_roles


class Role(Base):
    __tablename__ = "roles"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), unique=True, nullable=False)  # e.g. "editor", "administrator"
    users = relationship("User", secondary=user_roles, back_populates="roles")


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    email = Column(String, unique=True, nullable=False)

    # A user may hold several roles; restriction applies if any of them is restricted
    roles = relationship("Role", secondary=user_roles, back_populates="users", lazy="selectin")

    contents = relationship("Content", back_populates="author", foreign_keys="Content.author_id")

    @property
    def role_names(self) -> list[str]:
        return [role.name for role in self.roles]

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username!r})>"
