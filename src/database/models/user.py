from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from ..database import Base

class User(Base):
    """
    플랫폼 사용자를 나타냅니다.
    email은 Keycloak의 username과 동일하며, Keycloak 사용자 조회에 사용됩니다.
    """
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, nullable=False, index=True)

    customer_associations = relationship("CustomerUser", back_populates="user", cascade="all, delete-orphan")
    project_associations = relationship("ProjectUser", back_populates="user", cascade="all, delete-orphan")
