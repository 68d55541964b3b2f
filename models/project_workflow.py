from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, func
from sqlalchemy.orm import relationship

from models.base import Base
from models.enums import WorkflowStatus, enum_values


class ProjectWorkflow(Base):
    """Lifecycle record of a project, one row per project.

    Each phase carries a start timestamp and a confirmation timestamp; the
    next phase starts at the moment the previous one is confirmed. Approval
    of the COMPLETED phase is a flag, not a status.
    """

    __tablename__ = "project_workflows"

    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(
        Integer,
        ForeignKey("projects.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )

    current_status = Column(
        Enum(WorkflowStatus, name="workflowstatus", values_callable=enum_values),
        default=WorkflowStatus.received,
        nullable=False,
    )

    received_start_at = Column(DateTime(timezone=True), nullable=True)
    received_confirmed_at = Column(DateTime(timezone=True), nullable=True)

    in_progress_start_at = Column(DateTime(timezone=True), nullable=True)
    in_progress_confirmed_at = Column(DateTime(timezone=True), nullable=True)

    completed_start_at = Column(DateTime(timezone=True), nullable=True)
    completed_approved_at = Column(DateTime(timezone=True), nullable=True)
    completed_approved_by_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    completed_confirmed_at = Column(DateTime(timezone=True), nullable=True)

    sent_to_customer_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    project = relationship("Project", back_populates="workflow")
    completed_approved_by = relationship("User")
