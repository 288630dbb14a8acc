from .customer import Customer
from .project import Project, EDITABLE_FIELDS
from .environment import Environment
from .user import User
from .association import CustomerUser, ProjectUser

__all__ = ["Customer", "Project", "EDITABLE_FIELDS", "Environment", "User", "CustomerUser", "ProjectUser"]
