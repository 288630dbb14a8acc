from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from ..database import Base

class Environment(Base):
    """프로젝트의 배포 환경(브랜치 또는 PR 단위)을 나타냅니다."""
    __tablename__ = "environments"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    project_id = Column(Integer, ForeignKey("projects.id"), nullable=False)

    project = relationship("Project", back_populates="environments")
