from .project import IProjectRepository
from .customer import ICustomerRepository

__all__ = ["IProjectRepository", "ICustomerRepository"]
