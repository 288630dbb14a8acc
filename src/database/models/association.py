from sqlalchemy import Column, Integer, ForeignKey
from sqlalchemy.orm import relationship
from ..database import Base

class CustomerUser(Base):
    """
    고객 단위 멤버십입니다. 이 행이 있으면 사용자는 해당 고객의 모든 프로젝트에 접근할 수 있습니다.
    """
    __tablename__ = 'customer_users'
    customer_id = Column(Integer, ForeignKey('customers.id'), primary_key=True)
    user_id = Column(Integer, ForeignKey('users.id'), primary_key=True)

    customer = relationship("Customer", back_populates="user_associations")
    user = relationship("User", back_populates="customer_associations")

class ProjectUser(Base):
    """
    프로젝트 단위 직접 권한(direct grant)입니다.
    고객이 바뀌어도 이 행을 가진 사용자는 프로젝트 그룹에서 제거되지 않습니다.
    """
    __tablename__ = 'project_users'
    project_id = Column(Integer, ForeignKey('projects.id'), primary_key=True)
    user_id = Column(Integer, ForeignKey('users.id'), primary_key=True)

    project = relationship("Project", back_populates="user_associations")
    user = relationship("User", back_populates="project_associations")
