from enum import Enum

# ------------------- ENUMS ------------------------------------------ #
class UserRole(str, Enum):
    admin = "ADMIN"
    manager = "MANAGER"
    user = "USER"


class ProjectStatus(str, Enum):
    in_progress = "IN_PROGRESS"
    pending_approval = "PENDING_APPROVAL"
    completed = "COMPLETED"


class WorkflowStatus(str, Enum):
    received = "RECEIVED"
    in_progress = "IN_PROGRESS"
    completed = "COMPLETED"
    sent_to_customer = "SENT_TO_CUSTOMER"


def enum_values(enum_cls):
    """Store enum values (not member names) in the database."""
    return [member.value for member in enum_cls]
