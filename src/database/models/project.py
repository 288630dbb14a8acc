from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship
from ..database import Base

class Project(Base):
    """
    고객(Customer)에 속한 하나의 애플리케이션 배포 단위를 나타냅니다.
    git 저장소, 대상 OpenShift 클러스터, 배포 작업 설정을 가지며,
    이름은 Keycloak 그룹 및 SearchGuard 역할의 이름과 동일하게 유지됩니다.
    """
    __tablename__ = "projects"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False)
    git_url = Column(String, nullable=False, index=True)
    subfolder = Column(String)
    openshift = Column(Integer, nullable=False)
    openshift_project_pattern = Column(String)
    active_systems_deploy = Column(String, nullable=False)
    active_systems_promote = Column(String, nullable=False)
    active_systems_remove = Column(String, nullable=False)
    branches = Column(String, nullable=False)
    pullrequests = Column(String, nullable=False)
    production_environment = Column(String)
    auto_idle = Column(Boolean, nullable=False)
    storage_calc = Column(Boolean, nullable=False)
    development_environments_limit = Column(Integer, nullable=False)
    created = Column(DateTime, server_default=func.now())

    customer = relationship("Customer", back_populates="projects")
    environments = relationship("Environment", back_populates="project", cascade="all, delete-orphan")
    user_associations = relationship("ProjectUser", back_populates="project", cascade="all, delete-orphan")


# API를 통해 입력/수정할 수 있는 프로젝트 필드
EDITABLE_FIELDS = (
    "name",
    "customer_id",
    "git_url",
    "subfolder",
    "openshift",
    "openshift_project_pattern",
    "active_systems_deploy",
    "active_systems_promote",
    "active_systems_remove",
    "branches",
    "pullrequests",
    "production_environment",
    "auto_idle",
    "storage_calc",
    "development_environments_limit",
)
