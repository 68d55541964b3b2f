from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
    func,
)
from sqlalchemy.orm import relationship

from models.base import Base
from models.enums import ProjectStatus, enum_values


# ---------------- Junction Tables ----------------

project_implementers = Table(
    "project_implementers",
    Base.metadata,
    Column("project_id", ForeignKey("projects.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
)

project_followers = Table(
    "project_followers",
    Base.metadata,
    Column("project_id", ForeignKey("projects.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
)


# ---------------- Project ----------------
class Project(Base):
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(50), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    duration = Column(String(100), nullable=True)
    group = Column(String(100), nullable=True)
    value = Column(Float, nullable=True)
    progress_method = Column(String(100), nullable=False)
    attachment = Column(String(500), nullable=True)

    status = Column(
        Enum(ProjectStatus, name="projectstatus", values_callable=enum_values),
        default=ProjectStatus.in_progress,
        nullable=False,
    )
    progress = Column(Integer, default=0, nullable=False)

    manager_id = Column(Integer, ForeignKey("users.id"), nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
    is_deleted = Column(Boolean, default=False)

    manager = relationship("User", back_populates="managed_projects")

    # Many-to-many: Project <-> User
    implementers = relationship("User", secondary=project_implementers)
    followers = relationship("User", secondary=project_followers)

    # One-to-one: Project <-> ProjectWorkflow
    workflow = relationship(
        "ProjectWorkflow",
        back_populates="project",
        uselist=False,
        cascade="all, delete-orphan",
    )

    activities = relationship(
        "ProjectActivity",
        back_populates="project",
        cascade="all, delete-orphan"
    )
