from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from ..database import Base

class Customer(Base):
    """
    프로젝트를 소유하는 고객(조직)을 나타냅니다.
    고객 이름은 Kibana/SearchGuard 테넌트 이름으로도 사용됩니다.
    """
    __tablename__ = "customers"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False, index=True)

    projects = relationship("Project", back_populates="customer")
    user_associations = relationship("CustomerUser", back_populates="customer", cascade="all, delete-orphan")
