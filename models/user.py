from sqlalchemy import Boolean, Column, DateTime, Enum, Integer, String, func
from sqlalchemy.orm import relationship

from models.base import Base
from models.enums import UserRole, enum_values


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), unique=True, index=True, nullable=False)
    name = Column(String(255), nullable=False)
    position = Column(String(255), nullable=True)
    hashed_password = Column(String, nullable=False)
    role = Column(
        Enum(UserRole, name="userrole", values_callable=enum_values),
        default=UserRole.user,
        nullable=False,
    )
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    managed_projects = relationship("Project", back_populates="manager")
    activities = relationship("ProjectActivity", back_populates="user")
